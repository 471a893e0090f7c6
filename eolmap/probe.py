from typing import Callable, Dict
import logging
from pathlib import Path

from eolmap.config import Settings
from eolmap.golden import GoldenRepoCache, configure_commits
from eolmap.io import prepend_text_file, read_bytes, write_text_file
from eolmap.line_endings import LineEnding, classify_content
from eolmap.model import AUTHORED, ConfigurationTuple, ResultEntry, StepMapping
from eolmap.oracle import Oracle

logger = logging.getLogger(__name__)

# Fresh content written during the probe; each adds line breaks of one kind
CONTENT: Dict[LineEnding, str] = {
    LineEnding.LF: "Xline1Lf\nXline1Lf\n",
    LineEnding.CRLF: "XlineCrLf1\r\nXlineCrLf1\r\n",
    LineEnding.MIXED: "Xline1Lf\nline2CrLf\r\nXline1Lf\nline2CrLf\r\n",
}

# Adds no line break
PREPENDED_TEXT = "PrependedText"

# Slot of the fixture that gets overwritten, by written content
MODIFY_SLOTS: Dict[LineEnding, int] = {
    LineEnding.LF: 1,
    LineEnding.CRLF: 2,
    LineEnding.MIXED: 3,
}


class WorkspaceAllocator:
    def __init__(self, root: Path) -> None:
        self.root = root
        self.counter = 0

    def allocate(self) -> Path:
        path = self.root / f"target{self.counter}"
        self.counter += 1
        return path


def _observe(read: Callable[[str], bytes], name: Callable[[LineEnding], str]) -> StepMapping:
    return {authored: classify_content(read(name(authored))) for authored in AUTHORED}


def probe_configuration(
    oracle: Oracle,
    cache: GoldenRepoCache,
    allocator: WorkspaceAllocator,
    config: ConfigurationTuple,
    settings: Settings,
) -> ResultEntry:
    source = cache.ensure(config.gitattributes())
    target = allocator.allocate()
    logger.debug("Probing %s in %s", config, target)

    oracle.run(cache.root, 'clone', str(source.resolve()), str(target.resolve()), '--no-checkout')
    configure_commits(oracle, target, settings)
    for args in config.git_config_args():
        oracle.run(target, *args)

    oracle.run(target, 'checkout', settings.initial_branch)

    def show(name: str) -> bytes:
        return oracle.run(target, 'show', f"HEAD:{name}")

    def blob(name: str) -> bytes:
        return oracle.run(target, 'cat-file', 'blob', f"HEAD:{name}")

    def working_tree(name: str) -> bytes:
        return read_bytes(target / name)

    mapping: Dict[str, StepMapping] = {}
    mapping['show'] = _observe(show, lambda e: f"5-{e.value}.txt")
    mapping['clone'] = _observe(working_tree, lambda e: f"1-{e.value}.txt")

    for fixture in AUTHORED:
        for written, slot in MODIFY_SLOTS.items():
            write_text_file(target / f"{slot}-{fixture.value}.txt", CONTENT[written])
        prepend_text_file(target / f"4-{fixture.value}.txt", PREPENDED_TEXT)

    for written, content in CONTENT.items():
        write_text_file(target / f"new-{written.value}.txt", content)
        write_text_file(target / f"{MODIFY_SLOTS[written]}-simple.txt", content)

    oracle.run(target, 'add', '*')
    oracle.run(target, 'commit', '-m', 'update')

    for step, fixture in (('commitModifyLfFile', LineEnding.LF),
                          ('commitModifyCrLfFile', LineEnding.CRLF),
                          ('commitModifyMixedFile', LineEnding.MIXED)):
        mapping[step] = _observe(blob, lambda e, f=fixture: f"{MODIFY_SLOTS[e]}-{f.value}.txt")

    mapping['commitPrependSimpleText'] = _observe(blob, lambda e: f"4-{e.value}.txt")
    mapping['unmodified'] = _observe(blob, lambda e: f"5-{e.value}.txt")
    mapping['commitNew'] = _observe(blob, lambda e: f"new-{e.value}.txt")
    mapping['commitModifySimpleFile'] = _observe(blob, lambda e: f"{MODIFY_SLOTS[e]}-simple.txt")

    return ResultEntry(config=config, mapping=mapping)
