from typing import List
import json
from pathlib import Path

from eolmap.axes import enumerate_configurations
from eolmap.config import Settings
from eolmap.errors import WorkspaceError
from eolmap.golden import GoldenRepoCache
from eolmap.io import delete_if_exists, ensure_dir, write_text_file
from eolmap.messages import info, progress, success
from eolmap.model import ResultEntry
from eolmap.oracle import GitOracle, Oracle
from eolmap.probe import WorkspaceAllocator, probe_configuration
from eolmap.table import aggregate, write_table


# Written into every workspace this tool creates; nothing else is ever emptied
WORKSPACE_MARKER = '.eolmap-workspace'


def reset_workspace(path: Path) -> None:
    if path.exists():
        if not path.is_dir():
            raise WorkspaceError(f"Workspace {path} exists and is not a directory")
        if any(path.iterdir()) and not (path / WORKSPACE_MARKER).is_file():
            raise WorkspaceError(
                f"Refusing to empty {path.resolve()}: it is not empty and was not created by eolmap "
                f"(no {WORKSPACE_MARKER} file). Point `workspace` at a new or empty directory.")
        # Children only, so a workspace of `.` stays in place
        for child in path.iterdir():
            delete_if_exists(child)

    ensure_dir(path)
    write_text_file(path / WORKSPACE_MARKER, "")


def run_probes(settings: Settings, oracle: Oracle | None = None) -> List[ResultEntry]:
    """
    Probes every configuration into a fresh workspace and publishes the table.
    Any failure aborts the whole run; nothing is written in that case.
    """
    if oracle is None:
        oracle = GitOracle()

    reset_workspace(settings.workspace)

    configs = enumerate_configurations(settings.axes)
    info(f"Probing {len(configs)} configurations in {settings.workspace.resolve()}")

    cache = GoldenRepoCache(oracle, settings.workspace, settings)
    allocator = WorkspaceAllocator(settings.workspace)

    results: List[ResultEntry] = []
    for i, config in enumerate(configs, start=1):
        progress(i, len(configs), json.dumps(config.to_json()))
        results.append(probe_configuration(oracle, cache, allocator, config, settings))

    entries = aggregate(results, strict=settings.strict_invariants)
    write_table(settings.output_path, entries)

    success(f"Wrote {len(entries)} entries to {settings.output_path} ({cache.built} golden repositories)")
    if entries:
        print(json.dumps(entries[0].to_json()['mapping'], indent=4))
    return entries
