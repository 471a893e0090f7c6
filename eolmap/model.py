from __future__ import annotations
from typing import Any, Dict, List, Mapping, Tuple
from dataclasses import dataclass
import dataclasses

from eolmap.line_endings import LineEnding

##################################################################################################
# Configuration
##################################################################################################

AXIS_VALUES: Dict[str, Tuple[str, ...]] = {
    'text':          ('auto', 'false', 'true', 'undefined', 'binary'),
    'eol':           ('crlf', 'lf', 'undefined'),
    'core_autocrlf': ('false', 'true'),
    'core_eol':      ('crlf', 'lf', 'native'),
}

OS_VALUES: Tuple[str, ...] = ('unix', 'windows')

TEXT_ATTRIBUTES = {
    'true': 'text',
    'false': '-text',
    'auto': 'text=auto',
    'binary': 'binary',
}


@dataclass(frozen=True)
class ConfigurationTuple:
    text: str
    eol: str
    core_autocrlf: str
    core_eol: str
    # Not probed; tagged on when tables from several platforms are merged
    os: str | None = None

    def __post_init__(self):
        for name, allowed in AXIS_VALUES.items():
            value = getattr(self, name)
            if value not in allowed:
                raise ValueError(f"Invalid {name}: {value!r} (expected one of {', '.join(allowed)})")
        if self.os is not None and self.os not in OS_VALUES:
            raise ValueError(f"Invalid os: {self.os!r} (expected one of {', '.join(OS_VALUES)})")

    def gitattributes(self) -> str:
        options: List[str] = []
        if self.text != 'undefined':
            options.append(TEXT_ATTRIBUTES[self.text])
        if self.eol != 'undefined':
            options.append(f"eol={self.eol}")

        if options:
            return f"*.txt {' '.join(options)}"
        return ""

    def git_config_args(self) -> List[List[str]]:
        return [
            ['config', 'core.autocrlf', self.core_autocrlf],
            ['config', 'core.eol', self.core_eol],
        ]

    def with_os(self, os: str | None) -> ConfigurationTuple:
        return dataclasses.replace(self, os=os)

    def to_json(self) -> Dict[str, str]:
        result = {name: getattr(self, name) for name in AXIS_VALUES}
        if self.os is not None:
            result['os'] = self.os
        return result

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> ConfigurationTuple:
        unknown = set(data) - set(AXIS_VALUES) - {'os'}
        if unknown:
            raise ValueError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")
        return cls(**data)

##################################################################################################
# Results
##################################################################################################

# Authored line ending of a fixture; every step maps each of these to what git produced
AUTHORED: Tuple[LineEnding, ...] = (LineEnding.LF, LineEnding.CRLF, LineEnding.MIXED)

STEPS: Tuple[str, ...] = (
    'clone',
    'commitNew',
    'commitPrependSimpleText',
    'commitModifySimpleFile',
    'commitModifyCrLfFile',
    'commitModifyLfFile',
    'commitModifyMixedFile',
    'unmodified',
    'show',
)

type StepMapping = Dict[LineEnding, LineEnding]


@dataclass
class ResultEntry:
    config: ConfigurationTuple
    mapping: Dict[str, StepMapping]

    def __post_init__(self):
        if set(self.mapping) != set(STEPS):
            missing = [s for s in STEPS if s not in self.mapping]
            extra = [s for s in self.mapping if s not in STEPS]
            raise ValueError(f"Incomplete mapping for {self.config}: missing {missing}, unexpected {extra}")
        for step, record in self.mapping.items():
            if set(record) != set(AUTHORED):
                raise ValueError(f"Step {step} of {self.config} must map exactly {[e.value for e in AUTHORED]}")

    def to_json(self) -> Dict[str, Any]:
        return {
            'config': self.config.to_json(),
            'mapping': {
                step: {authored.value: self.mapping[step][authored].value for authored in AUTHORED}
                for step in STEPS
            },
        }

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> ResultEntry:
        mapping = {
            step: {LineEnding(k): LineEnding(v) for k, v in record.items()}
            for step, record in data['mapping'].items()
        }
        return cls(config=ConfigurationTuple.from_json(data['config']), mapping=mapping)
