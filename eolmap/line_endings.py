from typing import List, Iterable
import enum
import re


class LineEnding(enum.Enum):
    LF    = 'lf'
    CRLF  = 'crlf'
    MIXED = 'mixed'
    # No line break at all
    NONE  = 'none'


BREAK_PATTERN = re.compile(rb'\r\n|\n')


def get_line_endings(content: str | bytes) -> List[LineEnding]:
    """
    Returns one token per line break, in document order. A lone CR is not a break.
    """
    if isinstance(content, str):
        content = content.encode('utf-8')
    assert isinstance(content, bytes), f"Expected str or bytes, got {type(content)}"

    return [
        LineEnding.CRLF if m.group() == b'\r\n' else LineEnding.LF
        for m in BREAK_PATTERN.finditer(content)
    ]


def classify(tokens: Iterable[LineEnding]) -> LineEnding:
    tokens = list(tokens)
    for token in tokens:
        assert token in (LineEnding.LF, LineEnding.CRLF), f"Not a line break token: {token}"

    if not tokens:
        return LineEnding.NONE
    if all(t == LineEnding.CRLF for t in tokens):
        return LineEnding.CRLF
    if all(t == LineEnding.LF for t in tokens):
        return LineEnding.LF
    return LineEnding.MIXED


def classify_content(content: str | bytes) -> LineEnding:
    return classify(get_line_endings(content))
