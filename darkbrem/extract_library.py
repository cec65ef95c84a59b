"""Command that writes a dark brem event library out as a single CSV file."""

from __future__ import annotations

import sys

from darkbrem.library import DEFAULT_APRIME_LHE_ID, dump_library, parse_library

USAGE = """\
USAGE:
  darkbrem-extract-library [options] db-lib

  Write the events of a dark brem event library into one CSV file

ARGUMENTS
  db-lib : dark brem event library to load and extract

OPTIONS
  -h,--help             : print this help and exit
  -o,--output           : file to write the extracted events to
                          defaults to the library name with '.csv' appended
  --aprime-id           : A' ID number as used in the LHE files
"""


def _run(args: list[str]) -> int:
    db_lib = ""
    output = ""
    aprime_id = DEFAULT_APRIME_LHE_ID
    remaining = iter(args)
    for arg in remaining:
        if arg in ("-h", "--help"):
            print(USAGE, end="", flush=True)
            return 0
        if arg in ("-o", "--output", "--aprime-id"):
            value = next(remaining, None)
            if value is None:
                print(f"{arg} requires an argument after it", file=sys.stderr)
                return 1
            if arg == "--aprime-id":
                aprime_id = int(value)
            else:
                output = value
        elif arg.startswith("-"):
            print(f"{arg} is not a recognized option", file=sys.stderr)
            return 1
        else:
            db_lib = arg

    if not db_lib:
        print("ERROR: DB event library not provided.", file=sys.stderr)
        return 1

    if not output:
        db_lib = db_lib.removesuffix("/")
        output = db_lib + ".csv"

    try:
        out = open(output, "w", encoding="utf-8")
    except OSError:
        print(f"ERROR: Unable to open {output} for writing.", file=sys.stderr)
        return 2

    with out:
        dump_library(out, parse_library(db_lib, aprime_id))
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the command; returns the process exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        return _run(args)
    except Exception as error:  # any failure ends the command with status 127
        print(f"ERROR: {error}", file=sys.stderr)
        return 127


if __name__ == "__main__":
    sys.exit(main())