from pathlib import Path
import shutil

import pytest

from eolmap.config import Settings
from eolmap.testing import FakeGit


@pytest.fixture
def fake_git() -> FakeGit:
    return FakeGit()


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(workspace=tmp_path / 'git-workspace', os='unix')


@pytest.fixture
def real_git() -> None:
    if shutil.which('git') is None:
        pytest.skip("git is not installed")
