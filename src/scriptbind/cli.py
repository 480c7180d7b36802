#!/usr/bin/env python3
"""
scriptbind command line interface

Lists the registered packages and the function signatures they provide.
"""

import argparse
import logging
import sys
from typing import Optional

from .config import Features, get_config, init_config
from .engine import Engine
from .metadata import dump_signatures_yaml
from .packages import get_package, list_packages


def cmd_packages(args) -> int:
    for cls in list_packages():
        print(f"{cls.NAME:24} {cls.DESCRIPTION}")

    return 0


def cmd_signatures(args, features: Features) -> int:
    if args.package:
        try:
            package_cls = get_package(args.package)
        except KeyError as e:
            print(f"error: {e.args[0]}", file=sys.stderr)
            return 1

        engine = Engine.new_raw(features).load_package(package_cls(features))
    else:
        engine = Engine(features)

    modules = list(engine.iter_modules())

    if args.yaml:
        dump_signatures_yaml(modules, args.yaml if args.yaml != "-" else sys.stdout)
        return 0

    for signature in engine.gen_fn_signatures():
        print(signature)

    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scriptbind",
        description="Inspect native function packages",
    )
    parser.add_argument("--config", help="Path to a JSON5 config file")
    parser.add_argument(
        "--disable",
        action="append",
        choices=Features.names(),
        default=[],
        help="Disable an optional feature (repeatable)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log registrations")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    subparsers.add_parser("packages", help="List registered packages")

    signatures = subparsers.add_parser("signatures", help="List function signatures")
    signatures.add_argument("--package", help="Only this package")
    signatures.add_argument("--yaml", metavar="FILE", help="Write YAML to FILE ('-' for stdout)")

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    init_config(argv)
    features = get_config().features

    if args.command == "packages":
        return cmd_packages(args)

    if args.command == "signatures":
        return cmd_signatures(args, features)

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
