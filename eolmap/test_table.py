import json

import pytest

from eolmap.errors import InvariantError
from eolmap.line_endings import LineEnding
from eolmap.table import (
    Selection, affecting_axes, aggregate, check_invariants, find_entry, load_table, merge_tables, write_table,
)
from eolmap.testing import ALL_LF, make_entry

LF, CRLF, MIXED = LineEnding.LF, LineEnding.CRLF, LineEnding.MIXED


def test_consistent_entry_has_no_violations():
    entry = make_entry({'commitNew': ALL_LF, 'commitModifySimpleFile': ALL_LF, 'commitModifyLfFile': ALL_LF})
    assert check_invariants([entry]) == []


def test_show_must_be_identity():
    violations = check_invariants([make_entry({'show': ALL_LF})])
    assert len(violations) == 1
    assert 'show is not the identity' in str(violations[0])


@pytest.mark.parametrize("step, partner", [
    ('commitPrependSimpleText', 'unmodified'),
    ('commitModifySimpleFile', 'commitNew'),
    ('commitModifyLfFile', 'commitNew'),
    ('commitModifyMixedFile', 'commitModifyCrLfFile'),
])
def test_paired_steps_must_agree(step, partner):
    violations = check_invariants([make_entry({step: ALL_LF})])
    assert violations
    assert all(step in v.message and partner in v.message for v in violations)


def test_aggregate_keeps_order_and_reports():
    entries = [make_entry(text='auto'), make_entry(text='true', overrides={'show': ALL_LF})]
    assert aggregate(entries) == entries


def test_aggregate_strict_raises():
    with pytest.raises(InvariantError):
        aggregate([make_entry({'show': ALL_LF})], strict=True)


def test_aggregate_rejects_duplicates():
    with pytest.raises(ValueError):
        aggregate([make_entry(), make_entry()])


def test_table_round_trip_through_file(tmp_path):
    entries = [make_entry(text='auto'), make_entry({'clone': ALL_LF}, text='true')]
    path = tmp_path / 'data.json'
    write_table(path, entries)

    data = json.loads(path.read_text(encoding='utf-8'))
    assert data[1]['config'] == {'text': 'true', 'eol': 'undefined', 'core_autocrlf': 'false', 'core_eol': 'native'}
    assert data[1]['mapping']['clone'] == {'lf': 'lf', 'crlf': 'lf', 'mixed': 'lf'}

    assert load_table(path) == entries
    assert all(e.config.os == 'windows' for e in merge_tables({'windows': load_table(path)}))


def test_merge_tables_tags_os():
    merged = merge_tables({'unix': [make_entry()], 'windows': [make_entry({'clone': ALL_LF})]})
    assert [e.config.os for e in merged] == ['unix', 'windows']
    assert merged[1].mapping['clone'] == ALL_LF


def test_find_entry_by_fields():
    merged = merge_tables({'unix': [make_entry(), make_entry(text='auto')], 'windows': [make_entry()]})
    assert find_entry(merged, Selection(os='unix', text='auto')) is merged[1]
    assert find_entry(merged, Selection(os='windows')) is merged[2]
    assert find_entry(merged, Selection(os='windows', text='auto')) is None


def test_affecting_axes():
    merged = merge_tables({
        'unix': [make_entry(), make_entry(text='auto', overrides={'clone': ALL_LF}), make_entry(eol='lf')],
        'windows': [make_entry()],
    })
    affects = affecting_axes(merged, Selection())
    assert affects['text'] is True
    # Changing eol alone gives the same mapping
    assert affects['eol'] is False
    assert affects['os'] is False
    assert affects['core_eol'] is False


def test_selection_query_string():
    selection = Selection(os='windows', text='auto', eol='lf', core_autocrlf='true', core_eol='crlf')
    query = selection.to_query()
    assert query == "os=windows&text=auto&eol=lf&core_autocrlf=true&core_eol=crlf"
    assert Selection.from_query(query) == selection
    assert Selection.from_query("?" + query) == selection


def test_selection_query_defaults_and_errors():
    assert Selection.from_query("") == Selection()
    assert Selection.from_query("text=true") == Selection(text='true')
    with pytest.raises(ValueError):
        Selection.from_query("colour=blue")
    with pytest.raises(ValueError):
        Selection.from_query("eol=cr")
