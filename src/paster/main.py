#!/usr/bin/env python3

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from paster import __version__
from paster.config import (
    RELATIVE_DAYS,
    DateConfig,
    PasteConfig,
    default_date_format,
    default_work_dir,
)
from paster.errors import PasterError
from paster.services.date_service import format_day
from paster.services.paste_service import run_paste

logging.basicConfig(level=logging.WARNING, format='%(levelname)s: %(message)s')
logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="paster",
        description="paster - Save clipboard files, images and text as Markdown references"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    paste = subparsers.add_parser(
        "paste",
        help="Write clipboard content into a directory"
    )
    paste.add_argument(
        "dest_dir",
        type=Path,
        help="Directory that receives copied files and images"
    )
    paste.add_argument(
        "--cd",
        dest="work_dir",
        type=Path,
        default=default_work_dir(),
        help="Working directory that relative paths resolve against (env: PASTER_WORKDIR)"
    )

    date = subparsers.add_parser(
        "date",
        help="Print a relative date"
    )
    date.add_argument(
        "day",
        choices=RELATIVE_DAYS,
        help="Day to print"
    )
    date.add_argument(
        "-f", "--format",
        dest="fmt",
        default=default_date_format(),
        help="strftime format (env: PASTER_DATE_FORMAT, default: %%d/%%m/%%y)"
    )

    return parser.parse_args(argv)


def run(args) -> None:
    if args.command == "paste":
        config = PasteConfig(dest_dir=args.dest_dir, work_dir=args.work_dir)
        run_paste(config)
    elif args.command == "date":
        config = DateConfig(day=args.day, fmt=args.fmt)
        print(format_day(config))


def main(argv=None):
    args = parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.INFO)

    try:
        run(args)
    except (PasterError, OSError, ValidationError) as e:
        logger.error(f"Fatal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
