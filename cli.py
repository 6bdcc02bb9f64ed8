#!/usr/bin/env python3
"""
Bit field command line interface.

Reads and writes bit fields, words and floats inside a binary file.

Usage:
    python cli.py [--permissive] <command> <file> [args...]
    python cli.py size <nbits>

Examples:
    python cli.py read  data.bin 20 5          # read 5-bit field at bit 20
    python cli.py write data.bin 30 4 0xF      # write 4-bit field at bit 30
    python cli.py dump  data.bin 12            # hex dump of first 12 bytes
"""

import logging
import os
import sys

from bitfield import BitField, BitFieldError, __version__, bitfield_size

COMMANDS = {
    # name: (number of arguments after <file>, writes file)
    "read": (2, False),
    "write": (3, True),
    "readf": (1, False),
    "writef": (2, True),
    "dump": (None, False),
}


def print_version() -> None:
    """Print version information."""
    print(f"bitfield {__version__}")


def print_help(prog_name: str) -> None:
    """Print help message."""
    print(f"Bit field storage tool (v{__version__})")
    print("=" * 36)
    print()
    print("Usage:")
    print(f"  {prog_name} [--permissive] read   <file> <index> <width>")
    print(f"  {prog_name} [--permissive] write  <file> <index> <width> <value>")
    print(f"  {prog_name} [--permissive] readf  <file> <index>")
    print(f"  {prog_name} [--permissive] writef <file> <index> <value>")
    print(f"  {prog_name} dump <file> [n]")
    print(f"  {prog_name} size <nbits>")
    print()
    print("Options:")
    print("  --permissive   Truncate accesses at the end of the file instead of failing")
    print("  -h, --help     Show this help message")
    print("  -v, --version  Show version information")
    print()
    print("Arguments:")
    print("  index          Bit position (bit 0 = LSB of the first byte)")
    print("  width          Field width in bits (1-32)")
    print("  value          Integer (decimal, 0x, 0b or 0o prefixed) or float")
    print("  n              Number of bytes to dump (default: whole file)")
    print()
    print("Environment:")
    print("  BITFIELD_LOG   Logging level (e.g. DEBUG, INFO)")
    print()


def parse_int(text: str) -> int:
    """Parse an integer literal with optional 0x/0b/0o prefix."""
    return int(text, 0)


def run_command(command: str, path: str, args: list, strict: bool) -> int:
    """Run a file command.

    Args:
        command: Command name (read, write, readf, writef, dump).
        path: Binary file path.
        args: Remaining command arguments.
        strict: Bounds policy for the bit field.

    Returns:
        0 on success, 1 on error.
    """
    try:
        with open(path, "rb") as f:
            area = bytearray(f.read())
    except OSError as e:
        print(f"Error: Cannot open input file: {path} ({e})", file=sys.stderr)
        return 1

    try:
        if command in ("read", "write"):
            index = parse_int(args[0])
            width = parse_int(args[1])
        elif command in ("readf", "writef"):
            index = parse_int(args[0])
        elif args:
            n = parse_int(args[0])
        else:
            n = len(area)
        if command == "write":
            value = parse_int(args[2])
        elif command == "writef":
            value = float(args[1])
    except ValueError:
        print("Error: Numeric arguments must be numbers", file=sys.stderr)
        return 1

    with BitField(area, strict=strict) as bf:
        try:
            if command == "read":
                print(bf.read_uintn(index, width))
            elif command == "write":
                bf.write_uintn(index, value, width)
            elif command == "readf":
                print(repr(bf.read_float(index)))
            elif command == "writef":
                bf.write_float(index, value)
            else:
                print(bf.to_bytes(n).hex())
        except (BitFieldError, OverflowError) as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

    if COMMANDS[command][1]:
        try:
            with open(path, "wb") as f:
                f.write(area)
        except OSError as e:
            print(f"Error: Cannot write output file: {path} ({e})", file=sys.stderr)
            return 1

    return 0


def main() -> int:
    """CLI entry point."""
    args = sys.argv
    prog_name = args[0] if args else "cli.py"

    level = os.environ.get("BITFIELD_LOG")
    if level:
        logging.basicConfig(level=level.upper())

    # Check for help flag or no arguments
    if len(args) < 2:
        print_help(prog_name)
        return 1

    strict = args[1] != "--permissive"
    rest = args[1:] if strict else args[2:]

    if rest and rest[0] in ("-h", "--help"):
        print_help(prog_name)
        return 0

    if rest and rest[0] in ("-v", "--version"):
        print_version()
        return 0

    if not rest:
        print("Error: Missing command", file=sys.stderr)
        return 1

    command = rest[0]

    if command == "size":
        if len(rest) != 2:
            print(f"Usage: {prog_name} size <nbits>", file=sys.stderr)
            print("Error: size requires 1 argument", file=sys.stderr)
            return 1
        try:
            print(bitfield_size(parse_int(rest[1])))
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        return 0

    if command not in COMMANDS:
        print(f"Error: Unknown command: {command}", file=sys.stderr)
        return 1

    nargs = COMMANDS[command][0]
    given = len(rest) - 2
    if given < 0 or (nargs is None and given > 1) or (nargs is not None and given != nargs):
        print(f"Error: Wrong number of arguments for {command}", file=sys.stderr)
        print(f"Run {prog_name} --help for usage", file=sys.stderr)
        return 1

    return run_command(command, rest[1], rest[2:], strict)


if __name__ == "__main__":
    sys.exit(main())
