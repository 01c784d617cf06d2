"""Command line entry point: Tiled JSON in, VM artifacts out."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .loader import LoadError, load
from .model import ProcessedProject, RawProject
from .script_parser import ParseError, parse_scripts
from .vm import AssembleError, assemble_scripts
from .writers import emit_bin, emit_c


def process(raw: RawProject) -> ProcessedProject:
    """Parse and assemble every script of the project."""
    return ProcessedProject(vm=assemble_scripts(parse_scripts(raw.scripts)))


def run(input_path: str | Path, output_dir: str | Path) -> ProcessedProject:
    """Load the project, process it and write all artifacts to ``output_dir``."""
    processed = process(load(input_path))
    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)
    emit_c(processed, out)
    emit_bin(processed, out)
    return processed


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pokervm",
        description="Compile map scripts into VM byte-code and C++ headers.",
    )
    parser.add_argument("input", type=Path, help="Input .json map / project file")
    parser.add_argument("output", type=Path, help="Output directory")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    try:
        run(args.input, args.output)
    except (OSError, LoadError, ParseError, AssembleError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())