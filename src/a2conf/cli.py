"""Command-line interface for querying and editing Apache configuration."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from a2conf.config import A2CONF_LOG_LEVEL
from a2conf.exceptions import A2confError
from a2conf.node import Node
from a2conf.parser import ParseOptions, from_file

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="a2conf", description="Query and edit Apache-style configuration files."
    )
    parser.add_argument("file", help="Configuration file, e.g. /etc/apache2/apache2.conf")
    parser.add_argument("--dump", action="store_true", help="Print the (selected) configuration")
    parser.add_argument("--cmd", nargs="+", metavar="NAME", help="Print arguments of these directives")
    parser.add_argument("--vhost", metavar="HOST", help="Select the VirtualHost serving HOST")
    parser.add_argument("--arg", metavar="ARG", help="VirtualHost arguments must contain ARG, e.g. *:443")
    parser.add_argument("--vhosts", action="store_true", help="List virtual hosts and their names")
    parser.add_argument("--filter", metavar="PATTERN", help="Drop lines matching PATTERN (regex)")
    parser.add_argument(
        "--set",
        nargs=2,
        action="append",
        metavar=("NAME", "VALUE"),
        help="Set directive NAME to VALUE in the selection (repeatable)",
    )
    parser.add_argument(
        "--write", metavar="PATH", help="Write the whole tree to PATH (included files are inlined)"
    )
    parser.add_argument("--json", action="store_true", help="Print the (selected) tree as JSON")
    parser.add_argument("--no-includes", action="store_true", help="Do not resolve Include directives")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else A2CONF_LOG_LEVEL,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        return asyncio.run(_run(args))
    except (A2confError, OSError) as exc:
        print(f"a2conf: {exc}", file=sys.stderr)
        return 1


async def _run(args: argparse.Namespace) -> int:
    root = await from_file(args.file, ParseOptions(includes=not args.no_includes))

    if args.filter:
        root.filter(args.filter)

    selected: Node | None = root
    if args.vhost:
        selected = root.find_vhost(args.vhost, args.arg)
        if selected is None:
            print(f"a2conf: no VirtualHost for {args.vhost}", file=sys.stderr)
            return 1

    for name, value in args.set or []:
        logger.debug("Setting %s to %s", name, value)
        selected.set(name, value)

    if args.vhosts:
        for vhost in root.children("<VirtualHost>", recursive=True):
            print(f"{vhost.args}\t{' '.join(vhost.server_names())}")

    for name in args.cmd or []:
        for node in selected.children(name, recursive=True):
            print(node.args)

    if args.json:
        print(selected.to_model().model_dump_json(indent=2))

    if args.write:
        await root.write_file(args.write)

    wants_output = args.vhosts or args.cmd or args.json or args.write
    if args.dump or not wants_output:
        sys.stdout.write(selected.dump())

    return 0
