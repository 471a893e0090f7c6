from typing import Any, Dict, List, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from eolmap.io import read_template
from eolmap.line_endings import LineEnding
from eolmap.messages import error, info
from eolmap.model import AUTHORED, ResultEntry
from eolmap.table import (
    Selection, affecting_axes, available_os, check_invariants, find_entry, load_table, merge_tables,
)

REPORT_TEMPLATE = Path(__file__).parent.parent / 'templates' / 'report.txt.j2'

SETTING_LABELS: Dict[str, str] = {
    'text': 'text',
    'eol': 'eol',
    'os': 'OS',
    'core_autocrlf': 'core.autocrlf',
    'core_eol': 'core.eol',
}

LINE_ENDING_TEXT: Dict[LineEnding, str] = {
    LineEnding.LF: 'LF',
    LineEnding.CRLF: 'CR LF',
    LineEnding.MIXED: 'Mixed',
    LineEnding.NONE: 'None',
}


@dataclass
class Card:
    caption: str
    description: str
    source: str
    target: str
    step: str


CARDS: List[Card] = [
    Card('git clone',
         'line endings in the working directory after cloning a repository',
         'HEAD', 'Working Directory', 'clone'),
    Card('git commit',
         'line endings in new files (or modified files that had no CR LF line breaks before) in HEAD',
         'Working Directory', 'HEAD', 'commitModifySimpleFile'),
    Card('git commit',
         'line endings in modified files that already had some CR LF line breaks in HEAD',
         'Working Directory', 'HEAD', 'commitModifyCrLfFile'),
]


def render_entry(entries: Sequence[ResultEntry], selection: Selection) -> str:
    entry = find_entry(entries, selection)
    if entry is None:
        return "No Data\n"

    affects = affecting_axes(entries, selection)
    config = selection.config()

    settings = [
        {'label': label, 'value': getattr(selection, name), 'affects': affects[name]}
        for name, label in SETTING_LABELS.items()
    ]
    cards: List[Dict[str, Any]] = []
    for card in CARDS:
        step = entry.mapping[card.step]
        cards.append({
            'caption': card.caption,
            'description': card.description,
            'source': card.source,
            'target': card.target,
            'rows': [{'source': LINE_ENDING_TEXT[e], 'target': LINE_ENDING_TEXT[step[e]]} for e in AUTHORED],
        })

    return read_template(REPORT_TEMPLATE).render(
        settings=settings,
        git_commands=['git ' + ' '.join(args) for args in config.git_config_args()],
        gitattributes=config.gitattributes(),
        cards=cards,
    )


def load_entries(tables: Mapping[str, Path]) -> List[ResultEntry]:
    entries = merge_tables({os: load_table(path) for os, path in tables.items()})
    for violation in check_invariants(entries):
        error(f"Invariant violated: {violation}")
    return entries


def show(tables: Mapping[str, Path], selection: Selection) -> None:
    assert tables, "At least one table is required"
    entries = load_entries(tables)

    if selection.os not in available_os(entries):
        info(f"No table recorded on {selection.os}; available: {', '.join(available_os(entries))}")

    print(f"?{selection.to_query()}")
    print(render_entry(entries, selection), end='')
