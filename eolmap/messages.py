from enum import Enum

from termcolor import colored

###############################################################################
# Status lines
#
# Every line of a message gets the status mark; continuation lines are
# indented to the width of the bare mark so multi-line output stays aligned.
###############################################################################

class Mark(Enum):
    ERROR   = ("✗", "red")
    WARNING = ("!", "yellow")
    INFO    = ("i", "blue")
    SUCCESS = ("✓", "green")

    def __init__(self, symbol: str, color: str) -> None:
        self.symbol = symbol
        self.color = color

    @property
    def plain(self) -> str:
        return f"[{self.symbol}]"

    @property
    def tag(self) -> str:
        return f"[{colored(self.symbol, self.color)}]"


def format_message(mark: Mark, *parts) -> str:
    lines = '\n'.join(str(p) for p in parts).split('\n')
    indent = ' ' * len(mark.plain)
    head, *rest = lines
    return '\n'.join([f"{mark.tag} {head}", *(f"{indent} {line}" for line in rest)])


def _emit(mark: Mark, *parts) -> None:
    print(format_message(mark, *parts))


def error(*msg): _emit(Mark.ERROR, *msg)

def warning(*msg): _emit(Mark.WARNING, *msg)

def info(*msg): _emit(Mark.INFO, *msg)

def success(*msg): _emit(Mark.SUCCESS, *msg)


def progress(done: int, total: int, label: str) -> None:
    """
    One info line per configuration, counter right-aligned to the total.
    """
    width = len(str(total))
    info(f"[{done:>{width}}/{total}] {label}")
