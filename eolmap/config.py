from typing import Any, Dict, List
import dataclasses
from dataclasses import dataclass, field
from pathlib import Path
import sys

import yaml

from eolmap.axes import DEFAULT_AXES
from eolmap.model import AXIS_VALUES, OS_VALUES

################################################################################
# Settings
################################################################################

CONFIG_FILE = 'eolmap.yml'


def native_os() -> str:
    return 'windows' if sys.platform.lower() == 'win32' else 'unix'


@dataclass
class Settings:
    workspace: Path = Path('./git-workspace')
    output: str = 'data.json'
    initial_branch: str = 'main'

    # Commits must not depend on whatever identity the host has configured
    git_user_name: str = 'eolmap'
    git_user_email: str = 'eolmap@localhost'

    axes: Dict[str, List[str]] = field(default_factory=lambda: {k: list(v) for k, v in DEFAULT_AXES.items()})
    strict_invariants: bool = False
    os: str = field(default_factory=native_os)

    def __post_init__(self):
        if isinstance(self.workspace, str):
            self.workspace = Path(self.workspace)
        assert isinstance(self.workspace, Path), f"Expected Path, got {type(self.workspace)}"

        if self.os not in OS_VALUES:
            raise ValueError(f"Invalid os: {self.os!r} (expected one of {', '.join(OS_VALUES)})")

        if set(self.axes) != set(AXIS_VALUES):
            raise ValueError(f"Axes must be exactly {', '.join(AXIS_VALUES)}, got {', '.join(self.axes)}")
        for name, values in self.axes.items():
            bad = [v for v in values if v not in AXIS_VALUES[name]]
            if bad:
                raise ValueError(f"Invalid values for axis {name}: {bad}")

    @property
    def output_path(self) -> Path:
        return self.workspace / self.output


def settings_from_dict(data: Dict[str, Any]) -> Settings:
    known = {f.name for f in dataclasses.fields(Settings)}
    unknown = set(data) - known
    if unknown:
        raise ValueError(f"Unknown settings: {', '.join(sorted(unknown))}")

    if 'axes' in data:
        if not isinstance(data['axes'], dict):
            raise ValueError("Setting axes must be a mapping of axis name to values")
        for name, values in data['axes'].items():
            if not isinstance(values, list):
                raise ValueError(f"Axis {name} must be a list of values, got {values!r}")
        # YAML reads bare true/false as booleans
        overrides = {
            name: [str(v).lower() if isinstance(v, bool) else v for v in values]
            for name, values in data['axes'].items()
        }
        # Partial axis overrides keep the defaults for the remaining axes
        data = {**data, 'axes': {**{k: list(v) for k, v in DEFAULT_AXES.items()}, **overrides}}

    return Settings(**data)


def load_settings(path: Path | None = None) -> Settings:
    """
    Settings come from `eolmap.yml` in the current directory when present,
    or from an explicit file. Missing keys keep their defaults.
    """
    if path is None:
        path = Path(CONFIG_FILE)
        if not path.exists():
            return Settings()

    with open(path, 'rt', encoding='utf-8') as f:
        data = yaml.safe_load(f)

    if data is None:
        return Settings()
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping at the top of {path}, got {type(data).__name__}")
    return settings_from_dict(data)
