#!python3 -X utf8

from typing import Any, Dict
import sys
import os
import argparse
import dataclasses
from pathlib import Path
import logging
import urllib.parse

##################################################################################################
# Main
##################################################################################################

type ArgParser = argparse.ArgumentParser

class Commands:
    def __init__(self, parser: ArgParser) -> None:
        self.root_parser = parser
        self.subparsers = parser.add_subparsers(dest='command')

    class Command:
        def __init__(self, commands: 'Commands', name: str) -> None:
            self.parser = commands.subparsers.add_parser(name)

        def __enter__(self) -> ArgParser:
            return self.parser

        def __exit__(self, exc_type: Any, exc_value: Any, traceback: Any) -> None:
            pass

    def __call__(self, name: str) -> 'Commands.Command':
        return Commands.Command(self, name)


def build_parser() -> ArgParser:
    from eolmap.model import AXIS_VALUES, OS_VALUES

    parser = argparse.ArgumentParser(description="Map git line ending settings to observed behaviour.")
    parser.add_argument('--verbose', action='store_true', help='Trace every git invocation.')
    commands = Commands(parser)

    with commands('run') as cmd:
        cmd.add_argument('--config', type=str, help='Settings file (defaults to ./eolmap.yml when present).')

    with commands('show') as cmd:
        cmd.add_argument('--unix', type=str, help='Table recorded on Linux / Mac OS.')
        cmd.add_argument('--windows', type=str, help='Table recorded on Windows.')
        cmd.add_argument('--table', type=str, help='Table recorded on the OS given by --os.')
        cmd.add_argument('--os', type=str, choices=OS_VALUES)
        cmd.add_argument('--select', type=str, default='', help='Selection as a query string, e.g. "text=auto&eol=lf".')
        for name, values in AXIS_VALUES.items():
            cmd.add_argument('--' + name.replace('_', '-'), dest=name, type=str, choices=values)

    return parser


def main() -> None:
    if sys.platform.lower() == "win32":
        os.system('color')
        sys.stdout.reconfigure(encoding='utf-8') # type: ignore
        sys.stderr.reconfigure(encoding='utf-8') # type: ignore

    args = build_parser().parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format='%(message)s')

    from eolmap.messages import error
    from eolmap.errors import ProbeError

    try:
        match args.command:
            # No command runs the full probe
            case None | 'run':
                from eolmap.config import load_settings
                from eolmap.tasks.run import run_probes
                config_path = getattr(args, 'config', None)
                settings = load_settings(Path(config_path) if config_path else None)
                run_probes(settings)

            case 'show':
                from eolmap.config import native_os
                from eolmap.table import Selection
                from eolmap.tasks.show import show

                tables: Dict[str, Path] = {}
                if args.unix:    tables['unix'] = Path(args.unix)
                if args.windows: tables['windows'] = Path(args.windows)
                if args.table:   tables[args.os or native_os()] = Path(args.table)
                if not tables:
                    error("No table given; use --unix, --windows or --table")
                    sys.exit(2)

                selection = Selection.from_query(args.select)
                overrides = {k: getattr(args, k) for k in ('text', 'eol', 'core_autocrlf', 'core_eol') if getattr(args, k)}
                if args.os:
                    overrides['os'] = args.os
                elif 'os' not in dict(urllib.parse.parse_qsl(args.select.lstrip('?'))) and len(tables) == 1:
                    overrides['os'] = next(iter(tables))
                show(tables, dataclasses.replace(selection, **overrides))

            case _:
                raise ValueError(f"Unknown command: {args.command}")
    except (ProbeError, ValueError, FileNotFoundError) as e:
        error(str(e))
        sys.exit(1)


if __name__ == '__main__':
    main()
