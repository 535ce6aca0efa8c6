"""CLI entry point: run `nsresolve fixture.cpp` or `python -m nsresolve fixture.cpp`."""

import logging
import sys
from pathlib import Path
from typing import List, Optional


def main(argv: Optional[List[str]] = None) -> int:
    import argparse
    from .compiler.driver import CheckDriver
    from .passes.tag_check import SymbolTagCheckPass
    from .shared.serialization import serialize_session
    from .utils.io_utils import read_source_file

    parser = argparse.ArgumentParser(
        prog="nsresolve",
        description="Check the name-resolution annotations of C++ fixture files.",
    )
    parser.add_argument("files", type=Path, nargs="+", metavar="FILE", help="Fixture file(s) to check")
    parser.add_argument("--dump-scopes", action="store_true", help="Print the scope tree of each file as YAML")
    parser.add_argument("--no-color", action="store_true", help="Never color diagnostics")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging to stderr")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    color = False if args.no_color else None

    driver = CheckDriver()
    failed = 0
    for path in args.files:
        if not path.is_file():
            sys.stderr.write(f"nsresolve: error: file not found: {path}\n")
            failed += 1
            continue
        try:
            source = read_source_file(path)
        except (OSError, UnicodeDecodeError) as e:
            sys.stderr.write(f"nsresolve: error: could not read file: {e}\n")
            failed += 1
            continue

        result = driver.check(source, str(path))
        if args.dump_scopes:
            sys.stdout.write(f"# {path}\n")
            sys.stdout.write(serialize_session(result.tcx.session))

        if not result.success:
            sys.stderr.write(result.tcx.reporter.format_all_errors(color=color) + "\n")
            failed += 1
            continue

        summary = result.tcx.get_analysis(SymbolTagCheckPass)
        sys.stdout.write(f"{path}: {summary.checked} check(s) passed\n")

    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
