#!/usr/bin/env python3
"""
Dump the levels and gameflow of a Tomb Raider II/III script (TOMBPC.DAT).

Prints one block per level with its item names and the decoded gameflow,
resolving level, FMV and cutscene indices to the paths they refer to.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

sys.path.append(str(Path(__file__).resolve().parents[1]))

from tombflow.errors import GameflowError
from tombflow.formatter import format_command, format_event
from tombflow.opcodes import DEFAULT_DIALECT, GAMEFLOW_DIALECTS
from tombflow.script import Script, load_script, script_to_dict


def _clean(text: str) -> str:
    # Table strings keep their NUL terminators.
    return text.replace("\x00", "")


def _clean_list(values: Iterable[str]) -> List[str]:
    return [_clean(value) for value in values]


def summarise_script(script: Script) -> str:
    lines = []
    header = script.header
    lines.append(f"Version {script.version}, {script.language_name}: {script.description}")
    if header is not None:
        lines.append(f"  First option     : {format_event(header.first_option)}")
        lines.append(f"  Title replace    : {format_event(header.title_replace)}")
        lines.append(f"  On death (demo)  : {format_event(header.on_death_demo_mode)}")
        lines.append(f"  On death (game)  : {format_event(header.on_death_in_game)}")
        lines.append(f"  On demo interrupt: {format_event(header.on_demo_interrupt)}")
        lines.append(f"  On demo end      : {format_event(header.on_demo_end)}")
    lines.append("")
    for i, level in enumerate(script.levels):
        demo = " [demo]" if level.is_demo else ""
        lines.append(f"Level {i}: {_clean(level.name)} ({_clean(level.path)}){demo}")
        lines.append(f"  Puzzles: {_clean_list(level.puzzles)}")
        lines.append(f"  Keys: {_clean_list(level.keys)}")
        lines.append(f"  Pickups: {_clean_list(level.pickups)}")
        lines.append("  Flow: ")
        for j, instruction in enumerate(level.flow):
            lines.append(f"    {j}: {_clean(format_command(script, instruction))}")
    return "\n".join(lines)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Dump a Tomb Raider II/III gameflow script.")
    parser.add_argument("script", type=Path, help="Path to TOMBPC.DAT / TOMBPSX.DAT")
    parser.add_argument(
        "--game",
        choices=sorted(GAMEFLOW_DIALECTS),
        default=DEFAULT_DIALECT,
        help=f"Gameflow command set to decode with (default: {DEFAULT_DIALECT})",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Emit structured JSON instead of the human-readable summary.",
    )
    parser.add_argument("--verbose", action="store_true", help="Log each table as it is read.")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        script = load_script(args.script, dialect=args.game)
        if args.json:
            output = json.dumps(script_to_dict(script), indent=2)
        else:
            output = summarise_script(script)
    except OSError as exc:
        print(f"Error opening file: {exc}", file=sys.stderr)
        return 1
    except GameflowError as exc:
        print(f"Critical error reading script\n{exc}", file=sys.stderr)
        return 1

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
