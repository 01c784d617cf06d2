# pokervm

pokervm compiles the script objects of a Tiled map into bytecode for a small game VM.
It reads a Tiled JSON export and parses the script attached to each object. It then
groups the scripts by map chunk and assembles them into one binary blob. It also
writes a C++ header that declares the VM opcodes.

## Installation

```
pip install .
```

To run the tests, install the `test` extra and run `pytest`:

```
pip install .[test]
pytest
```

## Command line

```
pokervm INPUT.json OUTPUT_DIR
```

The input file must have a top-level `layers` array. Every layer must have a string
`name`, and that name must be `map`, `scripts` or `locations`. All three layers must
be present, and any other layer name is an error.

Each object in the `scripts` layer needs numeric `x` and `y` values. It also needs a
property named `script` whose value is a string of script source.

The output directory is created if it does not exist. Two files are written into it:

- `world_scripts.h` declares the `VmOpcode` enum class and two `extern` symbols,
  `world_scripts_bin` and `world_scripts_size`.
- `world_scripts.bin` holds the assembled bytecode for every chunk.

The command exits with status 0 on success. If the input cannot be read, loaded,
parsed or assembled, it prints `Error: ...` to standard error and exits with status 1.

## Script language

A script is a sequence of commands on a single line, and it must end with `;`.
Only spaces, tabs and carriage returns may separate tokens. A newline or any other
unexpected character is an error, and so is a script without the closing `;`.

```
msg {Hello there} tmsg @shop {Welcome!} tp 10 20 @house setflag flag_met_oak;
```

```
if flag_met_oak then msg {Hi again} else msg {Nice to meet you} endif;
```

```
if !flag_badge then tp 0 0 1 1 endif;
```

The commands are:

| Command | Form |
|---|---|
| `msg` | `msg {text}` |
| `tmsg` | `tmsg <location> {text}` |
| `tp` | `tp <location> <location>` |
| `setflag` / `unsetflag` / `readflag` | `setflag flag_<name>` |
| `if` | `if <cond> then <cmd> [else <cmd>] endif` |

- A location is either two numbers (`x y`, each 0–65535) or a tag written `@name`.
- Texts go between `{` and `}` and cannot contain `}`.
- Flag commands take an identifier that starts with `flag_`.
- In an `if`, `name` tests that a flag is set and `!name` tests that it is clear.
  Each branch is a single command.

Every distinct text, tag and flag gets a numeric index, in the order it first appears
across all scripts. Up to 255 tags, 255 flags and 65535 texts are allowed.

## Bytecode

Each command starts with a one-byte opcode, in this order: `Msg` 0, `TMsg` 1,
`Tp` 2, `If` 3, `SetFlag` 4, `UnsetFlag` 5, `ReadFlag` 6, `End` 7. The operands
follow the opcode, with all 16-bit values in little-endian order:

- A text, tag or flag is written as its 16-bit index.
- A location is `0` followed by `x` and `y` as 16-bit values, or `1` followed by a tag index.
- A condition is `0` (flag set) or `1` (flag clear), followed by a flag index.
- An `if` writes its condition and then a branch. The branch is `0` followed by the
  then and else commands, or `1` followed by the then command alone.

In the assembled blob, every top-level command is followed by a `0x00` byte.

## Chunks

The world is 256×256 tiles and is divided into chunks of 8×4 tiles, which gives
32 columns and 64 rows (2048 chunks). A script belongs to the chunk that contains
its object's position, truncated to whole tiles. A script whose position falls
outside the map is an error. Chunks are assembled in row-major order. The assembled
bytecode of a single chunk may not exceed 512 bytes, and every command offset must
fit in 16 bits.

## Library use

```python
from pokervm.loader import load_from_json, tiled_to_raw
from pokervm.script_parser import parse_scripts
from pokervm.vm import assemble_scripts

with open("world.json", encoding="utf-8") as fh:
    tiled = load_from_json(fh.read())
parsed = parse_scripts(tiled_to_raw(tiled).scripts)
processed = assemble_scripts(parsed)
print(processed.offsets, len(processed.blob))
```

- `pokervm.loader.load(path)` reads a file and returns a `RawProject`.
- `pokervm.lexer.tokenize(src)` and `pokervm.script_parser.Parser(src).parse()`
  give the tokens and the command tree of a single script.
- `pokervm.cli.process(raw)` parses and assembles a `RawProject`.
- `pokervm.cli.run(input_path, output_dir)` does what the command does and returns
  the `ProcessedProject`.
- `pokervm.writers.emit_c` and `pokervm.writers.emit_bin` each write one output
  file and return its path.

Errors are raised as `LexError`, `ParseError`, `LoadError` and `AssembleError`.
All of them are subclasses of `ValueError`.

## What it does not do

- The `map` and `locations` layers are checked to be present and then kept as raw
  JSON. No tiles, collision data or location coordinates are compiled from them.
- The header only declares `world_scripts_bin` and `world_scripts_size`. No C or C++
  source that defines them is written, and embedding `world_scripts.bin` is left to
  your build.
- The `end` command has an opcode, but the parser does not accept it in scripts.
- There is no VM to run the bytecode.
- `ProcessedScripts.names` is always empty.