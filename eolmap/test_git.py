"""
Runs against the real git binary; skipped when git is not installed.
"""
import pytest

from eolmap.errors import OracleFailure
from eolmap.golden import GoldenRepoCache
from eolmap.line_endings import LineEnding
from eolmap.model import AUTHORED, ConfigurationTuple
from eolmap.oracle import GitOracle
from eolmap.probe import WorkspaceAllocator, probe_configuration
from eolmap.table import IDENTITY

pytestmark = pytest.mark.usefixtures('real_git')


def test_oracle_returns_raw_bytes(tmp_path):
    oracle = GitOracle()
    oracle.run(tmp_path, 'init', '--initial-branch=main')
    oracle.run(tmp_path, 'config', 'core.autocrlf', 'false')
    oracle.run(tmp_path, 'config', 'commit.gpgsign', 'false')
    oracle.run(tmp_path, 'config', 'user.name', 'test')
    oracle.run(tmp_path, 'config', 'user.email', 'test@localhost')
    (tmp_path / 'a.txt').write_bytes(b"one\r\ntwo\n")
    oracle.run(tmp_path, 'add', 'a.txt')
    oracle.run(tmp_path, 'commit', '-m', 'a')

    # Trailing newline and CR LF both survive
    assert oracle.run(tmp_path, 'cat-file', 'blob', 'HEAD:a.txt') == b"one\r\ntwo\n"
    assert oracle.run(tmp_path, 'show', 'HEAD:a.txt') == b"one\r\ntwo\n"


def test_oracle_failure_carries_details(tmp_path):
    oracle = GitOracle()
    oracle.run(tmp_path, 'init', '--initial-branch=main')
    with pytest.raises(OracleFailure) as excinfo:
        oracle.run(tmp_path, 'cat-file', 'blob', 'HEAD:missing.txt')
    assert excinfo.value.status not in (None, 0)
    assert excinfo.value.command == ['cat-file', 'blob', 'HEAD:missing.txt']


def test_oracle_missing_directory(tmp_path):
    with pytest.raises(OracleFailure):
        GitOracle().run(tmp_path / 'does-not-exist', 'status')


def test_text_attribute_without_autocrlf(settings):
    oracle = GitOracle()
    cache = GoldenRepoCache(oracle, settings.workspace, settings)
    allocator = WorkspaceAllocator(settings.workspace)
    config = ConfigurationTuple(text='true', eol='undefined', core_autocrlf='false', core_eol='lf')

    entry = probe_configuration(oracle, cache, allocator, config, settings)

    # Committing the attributes does not rewrite the CR LF blobs already in history
    assert entry.mapping['show'] == IDENTITY
    # Rewriting the CR LF fixture commits LF whatever was written into it
    assert entry.mapping['commitModifyCrLfFile'] == {e: LineEnding.LF for e in AUTHORED}
    # core.eol=lf never adds CRs on checkout
    assert entry.mapping['clone'] == IDENTITY
    # `text` normalizes whatever gets committed to LF
    assert entry.mapping['commitNew'] == {e: LineEnding.LF for e in AUTHORED}
    assert entry.mapping['commitModifyLfFile'] == entry.mapping['commitNew']
    assert entry.mapping['commitModifySimpleFile'] == entry.mapping['commitNew']


def test_golden_repository_built_once_with_real_git(settings):
    oracle = GitOracle()
    cache = GoldenRepoCache(oracle, settings.workspace, settings)
    first = cache.ensure("*.txt text=auto")
    second = cache.ensure("*.txt text=auto")
    assert first == second
    assert cache.built == 1
    assert oracle.run(first, 'cat-file', 'blob', 'HEAD:.gitattributes') == b"*.txt text=auto\n"
    assert oracle.run(first, 'cat-file', 'blob', 'HEAD:3-crlf.txt') == b"lineCrLf1\r\n"
