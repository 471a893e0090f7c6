from typing import List, Sequence


class ProbeError(Exception):
    pass


class OracleFailure(ProbeError):
    """
    A git invocation exited non-zero or could not be started at all.
    """
    def __init__(self, args: Sequence[str], cwd: str, status: int | None, stderr: str) -> None:
        self.command: List[str] = list(args)
        self.cwd = cwd
        self.status = status
        self.stderr = stderr
        detail = f"exit status {status}" if status is not None else "could not be started"
        super().__init__(f"git {' '.join(self.command)} ({cwd}): {detail}\n{stderr}".rstrip())


class FixtureAssertionError(ProbeError):
    """
    A golden repository did not commit its fixtures byte-exact.
    """
    def __init__(self, path: str, expected: Sequence[str], actual: Sequence[str]) -> None:
        self.path = path
        self.expected = list(expected)
        self.actual = list(actual)
        super().__init__(f"Fixture {path}: expected line endings {self.expected}, got {self.actual}")


class InvariantError(ProbeError):
    pass


class WorkspaceError(ProbeError):
    """
    The configured workspace holds files this tool did not create.
    """
