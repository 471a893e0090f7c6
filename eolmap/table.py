from __future__ import annotations
from typing import Dict, Iterable, List, Mapping, Sequence, Tuple
from dataclasses import dataclass
import dataclasses
import json
import logging
from pathlib import Path
import urllib.parse

from eolmap.errors import InvariantError
from eolmap.io import read_text_file, write_text_file
from eolmap.model import AUTHORED, AXIS_VALUES, OS_VALUES, ConfigurationTuple, ResultEntry, StepMapping
from eolmap.messages import error

logger = logging.getLogger(__name__)

##################################################################################################
# Aggregation
##################################################################################################

IDENTITY: StepMapping = {e: e for e in AUTHORED}

# Pairs of steps that must produce the same mapping for every configuration
EQUAL_STEPS: List[Tuple[str, str]] = [
    ('unmodified', 'commitPrependSimpleText'),
    ('commitModifySimpleFile', 'commitNew'),
    ('commitModifyLfFile', 'commitNew'),
    ('commitModifyCrLfFile', 'commitModifyMixedFile'),
]


@dataclass(frozen=True)
class InvariantViolation:
    config: ConfigurationTuple
    message: str

    def __str__(self) -> str:
        return f"{self.message} for {json.dumps(self.config.to_json())}"


def _format(mapping: StepMapping) -> str:
    return ', '.join(f"{k.value}->{mapping[k].value}" for k in AUTHORED)


def check_invariants(entries: Iterable[ResultEntry]) -> List[InvariantViolation]:
    violations: List[InvariantViolation] = []
    for entry in entries:
        if entry.mapping['show'] != IDENTITY:
            violations.append(InvariantViolation(
                entry.config, f"show is not the identity ({_format(entry.mapping['show'])})"))
        for a, b in EQUAL_STEPS:
            if entry.mapping[a] != entry.mapping[b]:
                violations.append(InvariantViolation(
                    entry.config,
                    f"{a} ({_format(entry.mapping[a])}) differs from {b} ({_format(entry.mapping[b])})"))
    return violations


def aggregate(entries: Iterable[ResultEntry], strict: bool = False) -> List[ResultEntry]:
    """
    Collects the per-configuration entries in probing order and cross-checks
    them. Violations are reported, and raise in strict mode.
    """
    result = list(entries)

    seen = set()
    for entry in result:
        if entry.config in seen:
            raise ValueError(f"Duplicate configuration in table: {entry.config}")
        seen.add(entry.config)

    violations = check_invariants(result)
    for violation in violations:
        error(f"Invariant violated: {violation}")
    if violations and strict:
        raise InvariantError(f"{len(violations)} invariant violation(s), first: {violations[0]}")
    return result

##################################################################################################
# Published table
##################################################################################################

def write_table(path: Path, entries: Sequence[ResultEntry]) -> None:
    write_text_file(path, json.dumps([e.to_json() for e in entries], indent=4))


def load_table(path: Path) -> List[ResultEntry]:
    data = json.loads(read_text_file(path))
    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON array in {path}")
    entries = [ResultEntry.from_json(item) for item in data]
    logger.debug("Loaded %d entries from %s", len(entries), path)
    return entries


def merge_tables(tables: Mapping[str, Sequence[ResultEntry]]) -> List[ResultEntry]:
    """Tags every entry with the OS its table was recorded on."""
    merged: List[ResultEntry] = []
    for os, entries in tables.items():
        merged.extend(dataclasses.replace(e, config=e.config.with_os(os)) for e in entries)
    return merged

##################################################################################################
# Lookup
##################################################################################################

SELECTION_FIELDS: Tuple[str, ...] = ('os', *AXIS_VALUES)


@dataclass(frozen=True)
class Selection:
    os: str = 'unix'
    text: str = 'undefined'
    eol: str = 'undefined'
    core_autocrlf: str = 'false'
    core_eol: str = 'native'

    def __post_init__(self):
        # Validates the values
        self.config()

    def config(self) -> ConfigurationTuple:
        return ConfigurationTuple(
            text=self.text, eol=self.eol,
            core_autocrlf=self.core_autocrlf, core_eol=self.core_eol,
            os=self.os)

    def to_query(self) -> str:
        return urllib.parse.urlencode({name: getattr(self, name) for name in SELECTION_FIELDS})

    @classmethod
    def from_query(cls, query: str) -> Selection:
        values: Dict[str, str] = {}
        for key, value in urllib.parse.parse_qsl(query.lstrip("?")):
            if key not in SELECTION_FIELDS:
                raise ValueError(f"Unknown setting in query: {key}")
            values[key] = value
        return cls(**values)


def find_entry(entries: Iterable[ResultEntry], selection: Selection) -> ResultEntry | None:
    wanted = selection.config()
    for entry in entries:
        if entry.config == wanted:
            return entry
    return None


def affecting_axes(entries: Sequence[ResultEntry], selection: Selection) -> Dict[str, bool]:
    """
    A setting affects the result when varying it alone, with every other
    setting fixed at the selection, produces more than one distinct mapping.
    """
    result: Dict[str, bool] = {}
    for name in SELECTION_FIELDS:
        others = [n for n in SELECTION_FIELDS if n != name]
        mappings = set()
        for entry in entries:
            if all(getattr(entry.config, n) == getattr(selection, n) for n in others):
                mappings.add(json.dumps(entry.to_json()['mapping'], sort_keys=True))
        result[name] = len(mappings) > 1
    return result


def available_os(entries: Iterable[ResultEntry]) -> List[str]:
    present = {e.config.os for e in entries}
    return [os for os in OS_VALUES if os in present]

