"""
Test doubles and builders shared by the test modules.
"""
from typing import Callable, Dict, List, Tuple
from pathlib import Path

from eolmap.errors import OracleFailure
from eolmap.line_endings import LineEnding
from eolmap.model import AUTHORED, STEPS, ConfigurationTuple, ResultEntry


class FakeGit:
    """
    In-process stand-in for the git binary. Commits snapshot the working tree
    byte for byte (optionally passed through `commit_filter`), clones copy the
    last snapshot and checkouts write it back out.
    """
    def __init__(self, commit_filter: Callable[[str, bytes], bytes] | None = None) -> None:
        self.commit_filter = commit_filter
        self.calls: List[Tuple[Path, Tuple[str, ...]]] = []
        self.heads: Dict[Path, Dict[str, bytes]] = {}
        self.configs: Dict[Path, Dict[str, str]] = {}

    def commands(self, name: str) -> List[Tuple[Path, Tuple[str, ...]]]:
        return [c for c in self.calls if c[1][0] == name]

    def run(self, cwd: Path, *args: str) -> bytes:
        cwd = Path(cwd).resolve()
        self.calls.append((cwd, args))
        if not cwd.is_dir():
            raise OracleFailure(args, str(cwd), None, "no such directory")

        match args[0]:
            case 'init':
                (cwd / '.git').mkdir()
                self.heads[cwd] = {}
                self.configs[cwd] = {}
            case 'config':
                self.configs[cwd][args[1]] = args[2]
            case 'add':
                pass
            case 'commit':
                snapshot = {}
                for path in cwd.iterdir():
                    if path.is_file():
                        content = path.read_bytes()
                        if self.commit_filter is not None:
                            content = self.commit_filter(path.name, content)
                        snapshot[path.name] = content
                self.heads[cwd] = snapshot
            case 'clone':
                src, dst = Path(args[1]).resolve(), Path(args[2]).resolve()
                (dst / '.git').mkdir(parents=True)
                self.heads[dst] = dict(self.heads[src])
                self.configs[dst] = {}
            case 'checkout':
                for name, content in self.heads[cwd].items():
                    (cwd / name).write_bytes(content)
            case 'cat-file' | 'show':
                name = args[-1].split(':', 1)[1]
                if name not in self.heads[cwd]:
                    raise OracleFailure(args, str(cwd), 128, f"fatal: path '{name}' does not exist in 'HEAD'")
                return self.heads[cwd][name]
            case _:
                raise OracleFailure(args, str(cwd), 1, f"unsupported command {args[0]}")
        return b''


def make_entry(overrides=None, **config) -> ResultEntry:
    """
    An entry whose every step is the identity, apart from the steps in `overrides`.
    """
    values = dict(text='undefined', eol='undefined', core_autocrlf='false', core_eol='native')
    values.update(config)
    mapping = {step: {e: e for e in AUTHORED} for step in STEPS}
    for step, record in (overrides or {}).items():
        mapping[step] = dict(record)
    return ResultEntry(ConfigurationTuple(**values), mapping)


ALL_LF = {e: LineEnding.LF for e in AUTHORED}
