from typing import Protocol
import logging
from pathlib import Path

import git
from git.exc import GitCommandError, GitCommandNotFound

from eolmap.errors import OracleFailure

logger = logging.getLogger(__name__)


class Oracle(Protocol):
    """
    Runs one git subcommand in a directory and returns its raw stdout.
    Any failure raises `OracleFailure`.
    """
    def run(self, cwd: Path, *args: str) -> bytes: ...


class GitOracle:
    def run(self, cwd: Path, *args: str) -> bytes:
        cwd = Path(cwd).resolve()
        logger.debug("> {%s} git %s", cwd, ' '.join(args))

        try:
            # Raw bytes: GitPython would otherwise decode and strip the trailing newline
            stdout = git.Git(cwd).execute(
                ['git', *args],
                stdout_as_string=False,
                strip_newline_in_stdout=False,
            )
        except GitCommandNotFound as e:
            raise OracleFailure(args, str(cwd), None, str(e)) from e
        except GitCommandError as e:
            stderr = e.stderr if isinstance(e.stderr, str) else repr(e.stderr)
            raise OracleFailure(args, str(cwd), e.status, stderr) from e

        logger.debug("< %s", stdout.decode('utf-8', errors='replace'))
        return stdout
