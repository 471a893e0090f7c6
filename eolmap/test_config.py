from pathlib import Path

import pytest

from eolmap.axes import DEFAULT_AXES
from eolmap.config import Settings, load_settings


def test_defaults():
    settings = Settings()
    assert settings.workspace == Path('./git-workspace')
    assert settings.output_path == Path('./git-workspace') / 'data.json'
    assert settings.initial_branch == 'main'
    assert settings.axes == DEFAULT_AXES
    assert settings.strict_invariants is False
    assert settings.os in ('unix', 'windows')


def test_load_from_yaml(tmp_path):
    path = tmp_path / 'eolmap.yml'
    path.write_text(
        "workspace: out\n"
        "strict_invariants: true\n"
        "axes:\n"
        "  text: [auto, 'true']\n"
        "os: windows\n",
        encoding='utf-8')

    settings = load_settings(path)
    assert settings.workspace == Path('out')
    assert settings.strict_invariants is True
    assert settings.os == 'windows'
    assert settings.axes['text'] == ['auto', 'true']
    assert settings.axes['eol'] == DEFAULT_AXES['eol']


def test_missing_default_file_gives_defaults(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert load_settings() == Settings()


def test_empty_file_gives_defaults(tmp_path):
    path = tmp_path / 'eolmap.yml'
    path.write_text("", encoding='utf-8')
    assert load_settings(path) == Settings()


def test_unknown_keys_rejected(tmp_path):
    path = tmp_path / 'eolmap.yml'
    path.write_text("workspce: typo\n", encoding='utf-8')
    with pytest.raises(ValueError, match='workspce'):
        load_settings(path)


def test_invalid_axis_values_rejected(tmp_path):
    path = tmp_path / 'eolmap.yml'
    path.write_text("axes:\n  eol: [cr]\n", encoding='utf-8')
    with pytest.raises(ValueError):
        load_settings(path)


def test_non_mapping_rejected(tmp_path):
    path = tmp_path / 'eolmap.yml'
    path.write_text("- a\n- b\n", encoding='utf-8')
    with pytest.raises(ValueError):
        load_settings(path)


@pytest.mark.parametrize('text', ["axes:\n  eol: lf\n", "axes:\n  text: true\n"])
def test_scalar_axis_rejected(tmp_path, text):
    path = tmp_path / 'eolmap.yml'
    path.write_text(text, encoding='utf-8')
    with pytest.raises(ValueError, match='must be a list'):
        load_settings(path)


def test_axes_must_be_a_mapping(tmp_path):
    path = tmp_path / 'eolmap.yml'
    path.write_text("axes: [lf, crlf]\n", encoding='utf-8')
    with pytest.raises(ValueError, match='axes'):
        load_settings(path)
