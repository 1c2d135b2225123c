"""
Module: cli

Purpose:
    Command-line entry point. Loads polygons from a directory of levels
    or from saved stores, optionally writes the merged store, and
    optionally generates a numbered batch of levels.

Key Functions:
    - main(): Parse arguments and run
    - build_parser(): argparse definition
    - resolve_level_format(): Load a LevelFormat from "module:attribute"

Dependencies:
    - argparse (std)
    - importlib (std)

Used By:
    - python -m ztarter_toolkit
    - lev-ztarter console script
"""

from __future__ import annotations

import argparse
import importlib
import logging
from pathlib import Path
from typing import List, Optional, Sequence

from ztarter_toolkit import __version__
from ztarter_toolkit.core.errors import ZtarterError
from ztarter_toolkit.core.models import LevelFormat
from ztarter_toolkit.builder import BatchConfig, generate_levels
from ztarter_toolkit.extractor import ingest_directory
from ztarter_toolkit.store import PolygonStore, load_stores, save_store

logger = logging.getLogger("ztarter_toolkit.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lev-ztarter",
        description="Generate starter levels from polygons of existing levels",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    source = parser.add_mutually_exclusive_group()
    source.add_argument("-d", "--from-directory", type=Path, metavar="DIR",
                        help="load levels from a directory")
    source.add_argument("-r", "--from-database", type=Path, metavar="FILE",
                        help="load polygons from a store file")
    source.add_argument("-R", "--from-databases", metavar="FILES",
                        help="load polygons from comma separated store files")

    parser.add_argument("-w", "--to-database", type=Path, metavar="FILE",
                        help="write the loaded store")
    parser.add_argument("--tag-database", metavar="TAG",
                        help="tag the store that is being written (requires -w)")

    parser.add_argument("-g", "--generate", action="store_true",
                        help="generate levels using the loaded store(s)")
    parser.add_argument("-o", "--generate-directory", type=Path, default=Path("."), metavar="DIR",
                        help="generate levels to this directory")
    parser.add_argument("-n", "--level-name", default="L", metavar="NAME",
                        help="name of the level (e.g. for abc123 put abc)")
    parser.add_argument("-p", "--level-name-pad", type=int, metavar="NUM",
                        help="number of digits (e.g. for abc001 put 3)")
    parser.add_argument("-O", "--level-number-offset", type=int, default=1, metavar="NUM",
                        help="start numbering levels at this number")
    parser.add_argument("-N", "--level-amount", type=int, default=0, metavar="NUM",
                        help="amount of levels to generate")
    parser.add_argument("--seed", type=int, help="random seed for reproducible generation")
    parser.add_argument("--preview", action="store_true",
                        help="also write a PNG preview of each generated level")

    parser.add_argument("--level-format", metavar="MODULE:ATTR",
                        help="level file codec, e.g. mypackage.codec:LevelCodec")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def resolve_level_format(import_path: str) -> LevelFormat:
    """
    Import a level format from a "module:attribute" string.

    A class is instantiated with no arguments; any other object is used
    as is.

    Args:
        import_path: Import path such as "mypackage.codec:LevelCodec"

    Returns:
        Object implementing LevelFormat

    Raises:
        ValueError: If import_path is malformed or the object lacks load/save
        ImportError: If the module cannot be imported
    """
    module_name, sep, attribute = import_path.partition(":")
    if not sep or not module_name or not attribute:
        raise ValueError(f"Level format must look like 'module:attribute': {import_path!r}")

    target = importlib.import_module(module_name)
    for part in attribute.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as e:
            raise ValueError(f"{module_name} has no attribute {attribute!r}") from e

    level_format = target() if isinstance(target, type) else target
    if not isinstance(level_format, LevelFormat):
        raise ValueError(f"{import_path} does not provide load() and save()")
    return level_format


def _split_paths(value: str) -> List[Path]:
    return [Path(p.strip()) for p in value.split(",") if p.strip()]


def run(args: argparse.Namespace) -> int:
    """Execute a parsed command line. Returns the process exit code."""
    level_format: Optional[LevelFormat] = None
    if args.level_format:
        level_format = resolve_level_format(args.level_format)

    store = PolygonStore()

    if args.from_directory is not None:
        if level_format is None:
            logger.error("--from-directory needs --level-format")
            return 1
        result = ingest_directory(args.from_directory, level_format)
        for failed in result.failed:
            logger.warning(f"  corrupt: {failed}")
        store.merge(result.store)
    elif args.from_database is not None:
        store = load_stores([args.from_database])
    elif args.from_databases:
        store = load_stores(_split_paths(args.from_databases))

    if not store.is_empty:
        logger.info("Sorting the store.")
        store.sort_by_area()

    if args.tag_database is not None:
        store.tag = args.tag_database

    if args.to_database is not None:
        logger.info(f"Writing store to {args.to_database}.")
        save_store(store, args.to_database)

    if args.generate:
        if level_format is None:
            logger.error("--generate needs --level-format")
            return 1
        config = BatchConfig(
            output_dir=args.generate_directory,
            level_name=args.level_name,
            name_pad=args.level_name_pad,
            number_offset=args.level_number_offset,
            amount=args.level_amount,
            seed=args.seed,
            write_previews=args.preview,
        )
        generate_levels(store, level_format, config)

    logger.info("Done.")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.tag_database is not None and args.to_database is None:
        parser.error("--tag-database requires --to-database")
    for flag in ("generate_directory", "level_name", "level_name_pad",
                 "level_number_offset", "level_amount", "seed", "preview"):
        if getattr(args, flag) != parser.get_default(flag) and not args.generate:
            parser.error(f"--{flag.replace('_', '-')} requires --generate")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    try:
        return run(args)
    except (ZtarterError, ValueError, ImportError) as e:
        logger.error(str(e))
        return 1
