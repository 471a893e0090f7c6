"""
Golden repositories: one reference repository per distinct `.gitattributes`
content, holding fixture files whose committed bytes are known exactly.

Fixtures are committed under `* binary` with normalization switched off, so
git stores them as written. Only afterwards is the attribute content under test
committed on top; git never renormalizes blobs that are already in history.
"""
from typing import Dict, List, Tuple
import hashlib
import logging
from pathlib import Path

from eolmap.config import Settings
from eolmap.errors import FixtureAssertionError
from eolmap.io import delete_if_exists, ensure_dir, write_text_file
from eolmap.line_endings import LineEnding, get_line_endings
from eolmap.messages import info
from eolmap.oracle import Oracle

logger = logging.getLogger(__name__)

SLOTS = range(1, 6)

# File suffix -> content committed into every slot
FIXTURES: Dict[str, str] = {
    'lf': "line1Lf\n",
    'crlf': "lineCrLf1\r\n",
    'mixed': "line1Lf\nline2CrLf\r\n",
    # No line break ever, i.e. no CRLF history
    'simple': "empty",
}

EXPECTED_BREAKS: Dict[str, List[LineEnding]] = {
    'lf': [LineEnding.LF],
    'crlf': [LineEnding.CRLF],
    'mixed': [LineEnding.LF, LineEnding.CRLF],
    'simple': [],
}

# Local settings while authoring fixtures, independent of the tuple under test
AUTHORING_CONFIG: List[Tuple[str, str]] = [
    ('core.autocrlf', 'false'),
    ('core.eol', 'lf'),
]


def configure_commits(oracle: Oracle, path: Path, settings: Settings) -> None:
    oracle.run(path, 'config', 'commit.gpgsign', 'false')
    oracle.run(path, 'config', 'user.name', settings.git_user_name)
    oracle.run(path, 'config', 'user.email', settings.git_user_email)


def verify_fixtures(oracle: Oracle, path: Path) -> None:
    for suffix, expected in EXPECTED_BREAKS.items():
        name = f"1-{suffix}.txt"
        actual = get_line_endings(oracle.run(path, 'cat-file', 'blob', f"HEAD:{name}"))
        if actual != expected:
            raise FixtureAssertionError(
                str(path / name),
                [e.value for e in expected],
                [e.value for e in actual])


def build_golden_repo(oracle: Oracle, path: Path, gitattributes: str, settings: Settings) -> None:
    ensure_dir(path)
    oracle.run(path, 'init', f"--initial-branch={settings.initial_branch}")
    configure_commits(oracle, path, settings)

    for key, value in AUTHORING_CONFIG:
        oracle.run(path, 'config', key, value)

    write_text_file(path / '.gitattributes', "* binary\n")
    oracle.run(path, 'add', '*')
    oracle.run(path, 'commit', '-m', 'prepareGitRepo - update1')

    for slot in SLOTS:
        for suffix, content in FIXTURES.items():
            write_text_file(path / f"{slot}-{suffix}.txt", content)

    oracle.run(path, 'add', '*')
    oracle.run(path, 'commit', '-m', 'prepareGitRepo - update2')

    verify_fixtures(oracle, path)

    # Trailing newline so the commit is a change even for empty attribute content
    write_text_file(path / '.gitattributes', gitattributes + "\n")
    oracle.run(path, 'add', '.gitattributes')
    oracle.run(path, 'commit', '-m', 'prepareGitRepo - update3')


def content_key(gitattributes: str) -> str:
    return hashlib.sha256(gitattributes.encode('utf-8')).hexdigest()[:16]


class GoldenRepoCache:
    def __init__(self, oracle: Oracle, root: Path, settings: Settings) -> None:
        self.oracle = oracle
        self.root = root
        self.settings = settings
        self.repos: Dict[str, Path] = {}
        self.built = 0

    def path_for(self, gitattributes: str) -> Path:
        return self.root / f"source-{content_key(gitattributes)}"

    def ensure(self, gitattributes: str) -> Path:
        if gitattributes in self.repos:
            return self.repos[gitattributes]

        path = self.path_for(gitattributes)
        if path.exists():
            logger.debug("Reusing golden repository %s", path)
        else:
            info(f"Building golden repository for {gitattributes!r}")
            try:
                build_golden_repo(self.oracle, path, gitattributes, self.settings)
            except BaseException:
                # A half-built repository must never be mistaken for a cached one
                delete_if_exists(path)
                raise
            self.built += 1

        self.repos[gitattributes] = path
        return path
