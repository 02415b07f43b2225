"""
packgen command line

Reads a resolved package description (JSON) and writes one TypeScript
module per package file under the output directory.

Usage:
    packgen package.json --output-dir generated/
    packgen --model package.json -o generated/ --base-module @acme/runtime --base-alias acme
"""

import argparse
import sys
import time
from pathlib import Path
from typing import Optional

from .config import GeneratorConfig
from .errors import ContractError, EmitError
from .loader import LoadError, load_package
from .log import configure_logging
from .pack_generator import PackGenerator


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate TypeScript declarations from an IDL package")
    parser.add_argument("model_file", nargs="?", help="Path to package description (positional)")
    parser.add_argument("--model", help="Path to package description (alternative)")
    parser.add_argument("--output-dir", "-o", default="generated", help="Output directory")
    parser.add_argument("--root", default=".", help="Source root member positions are relative to")
    parser.add_argument("--extension", default=".ts", help="Extension of generated files")
    parser.add_argument("--base-module", default="@coconut/coconut", help="Module providing the Resource base class")
    parser.add_argument("--base-alias", default="coconut", help="Import alias for the base module")
    parser.add_argument("--keep-going", "-k", action="store_true", help="Continue after a file fails to write")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log every emitted member")
    parser.add_argument("--log-file", default="", help="Also write the log to this file")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    start_time = time.perf_counter()

    parser = build_parser()
    args = parser.parse_args(argv)

    # Support both positional and --model argument
    model_file = args.model_file or args.model
    if not model_file:
        parser.error("package description is required (positional or --model)")

    logger = configure_logging(verbose=args.verbose, log_file=Path(args.log_file) if args.log_file else None)

    config = GeneratorConfig(
        out=Path(args.output_dir),
        root=Path(args.root),
        extension=args.extension,
        base_module=args.base_module,
        base_alias=args.base_alias,
    )

    try:
        pkg = load_package(model_file)
    except OSError as exc:
        logger.error("Cannot read %s: %s", model_file, exc)
        return 2
    except LoadError as exc:
        logger.error("%s", exc)
        return 2

    try:
        written, errors = PackGenerator(config).generate(pkg, keep_going=args.keep_going)
    except ContractError as exc:
        logger.error("%s", exc)
        return 2
    except EmitError as exc:
        logger.error("%s", exc)
        return 1

    elapsed = time.perf_counter() - start_time
    print(f"Generated {len(written)} file(s) in {elapsed*1000:.2f} ms")
    if errors:
        print(f"{len(errors)} file(s) failed", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
