#!/usr/bin/env python3
"""
Command line interface for Playtime.
"""

import argparse
import sys
from typing import List, Optional

from . import __version__
from .core import Playtime
from .errors import PlaytimeError
from .output import ConsoleReporter
from .settings import build_settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="playtime",
        description="Launch apps and keep a record of how long you play them.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--config-dir",
        default=None,
        help="Directory holding config.json (default: platform config dir).",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Do not print confirmation messages.",
    )

    sub = parser.add_subparsers(dest="command", metavar="COMMAND")
    sub.required = True

    padd = sub.add_parser("add", help="Add an app to the config file")
    padd.add_argument("name", help="Name of the application")
    padd.add_argument("exe", help="Path to the executable")
    padd.set_defaults(handler=lambda app, args: app.add(args.name, args.exe))

    prm = sub.add_parser("remove", help="Remove an app from the config file")
    prm.add_argument("name", help="Name of the app to remove")
    prm.set_defaults(handler=lambda app, args: app.remove(args.name))

    plist = sub.add_parser("list", help="List all saved apps")
    plist.set_defaults(handler=lambda app, args: app.list_apps())

    pstart = sub.add_parser(
        "start",
        aliases=["run"],
        help="Start an app and record time to the config file",
    )
    pstart.add_argument("name", help="Name of the app to start")
    pstart.set_defaults(handler=lambda app, args: app.start(args.name))

    psessions = sub.add_parser("sessions", help="List all recorded sessions")
    psessions.add_argument("name", help="Name of the app to print sessions for")
    psessions.set_defaults(handler=lambda app, args: app.sessions(args.name))

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point. Returns the process exit code."""
    args = build_parser().parse_args(argv)

    settings = build_settings(
        config_dir=args.config_dir,
        verbose=False if args.quiet else None,
    )
    reporter = ConsoleReporter(verbose=settings.verbose)
    app = Playtime(settings=settings, reporter=reporter)

    try:
        args.handler(app, args)
    except PlaytimeError as e:
        reporter.log_error(e)
        return 1
    except KeyboardInterrupt:
        reporter.log_interrupted()
        return 130

    return 0


if __name__ == "__main__":
    sys.exit(main())
