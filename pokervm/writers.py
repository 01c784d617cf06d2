"""Output files: the C++ header for the VM and the raw script blob."""

from __future__ import annotations

from pathlib import Path

from .ast import Cmd
from .model import ProcessedProject

_PREFIX = "world"


def emit_c(project: ProcessedProject, out_dir: str | Path) -> Path:
    """Write the C++ header declaring the opcodes and the blob symbols."""
    lines = [
        "#pragma once",
        "#include <cstdint>",
        "// Auto-generated – DO NOT EDIT",
        "",
        "enum class VmOpcode : uint8_t {",
        *(f"    {name} = {idx}," for idx, name in enumerate(Cmd.VARIANT_NAMES)),
        "};",
        "",
        f"extern const uint8_t  {_PREFIX}_scripts_bin[];",
        f"extern const uint32_t {_PREFIX}_scripts_size;",
    ]
    path = Path(out_dir) / f"{_PREFIX}_scripts.h"
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def emit_bin(project: ProcessedProject, out_dir: str | Path) -> Path:
    """Write the assembled script blob as a raw binary file."""
    path = Path(out_dir) / f"{_PREFIX}_scripts.bin"
    path.write_bytes(project.vm.blob)
    return path