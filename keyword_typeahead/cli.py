"""
cli.py - command line entry point
Commands:
- tui (default): interactive search box with keyword completion
- lookup <text>: one-shot typeahead lookup, printed as a table
- config [key val]: show or change options
Uses Rich for tables and formatting.
"""

import argparse
import asyncio
import logging
import sys

from rich import box
from rich.console import Console
from rich.table import Table

from keyword_typeahead.core.candidates import CandidateKind, TopicEntry, UserEntry
from keyword_typeahead.core.query_mode import KeywordGrammar, KeywordLookup
from keyword_typeahead.core.trie import Trie
from keyword_typeahead.transport.typeahead_client import StaticTransport, TypeaheadClient
from keyword_typeahead.utils.config_manager import Config
from keyword_typeahead.utils.logger_utils import Log

console = Console()
logger = logging.getLogger("keyword_typeahead.cli")

# used by --offline, so the TUI can be tried without a session
OFFLINE_ENTRIES = [
    UserEntry("alice", "Alice Liddell", bio="Down the rabbit hole", is_verified=True),
    UserEntry("albert", "Albert Hofmann", bio="Chemist"),
    UserEntry("alan_turing", "Alan Turing", bio="Computing machinery"),
    UserEntry("bob", "Bob", bio=""),
    UserEntry("carol", "Carol Shaw", bio="River Raid"),
    TopicEntry("python"),
    TopicEntry("python packaging"),
    TopicEntry("rabbits"),
    TopicEntry("chemistry"),
]


def build_transport(cfg, offline=False):
    if offline:
        return StaticTransport(OFFLINE_ENTRIES)
    return TypeaheadClient(
        cfg.credentials(),
        base_url=cfg.get("base_url"),
        timeout=float(cfg.get("request_timeout")),
    )


def cmd_tui(cfg, args):
    # imported here so `lookup`/`config` do not pay for textual
    from keyword_typeahead.tui_app import TypeaheadApp

    TypeaheadApp(cfg, build_transport(cfg, args.offline)).run()
    return 0


async def _lookup(cfg, text, offline):
    grammar = KeywordGrammar(Trie.from_words(cfg.get("keywords")))
    mode = grammar.classify(text)
    if isinstance(mode, KeywordLookup):
        keyword, query, kind = mode.keyword, mode.partial, CandidateKind.USER
    else:
        keyword, query, kind = "", text, CandidateKind.TOPIC
    if not query:
        return []

    transport = build_transport(cfg, offline)
    try:
        with Log.time_block(f"lookup {query!r}"):
            return await transport.lookup_by_keyword(keyword, query, kind=kind)
    finally:
        await transport.aclose()


def cmd_lookup(cfg, args):
    try:
        entries = asyncio.run(_lookup(cfg, args.text, args.offline))
    except Exception as e:
        logger.warning("lookup failed: %s", e)
        console.print(f"[red]Lookup failed:[/red] {e}")
        return 1

    if not entries:
        console.print("[dim](no suggestions)[/dim]")
        return 0

    table = Table(box=box.SIMPLE)
    table.add_column("#", justify="right")
    table.add_column("id", style="cyan")
    table.add_column("name")
    table.add_column("bio", style="dim")
    for i, e in enumerate(entries, 1):
        if e.kind is CandidateKind.USER:
            name = e.display_name + (" [green]✓[/green]" if e.is_verified else "")
            table.add_row(str(i), "@" + e.handle, name, e.bio)
        else:
            table.add_row(str(i), e.label, "", "")
    console.print(table)
    return 0


def cmd_config(cfg, args):
    if not args.option:
        cfg.show(console)
        return 0
    if len(args.option) != 2:
        console.print("usage: config [key val]")
        return 2
    key, val = args.option
    try:
        cfg.set(key, val)
    except (KeyError, ValueError) as e:
        console.print(f"[red]{e}[/red]")
        return 2
    console.print(f"[green]{key}[/green] = {cfg.get(key)}")
    return 0


def build_parser():
    p = argparse.ArgumentParser(prog="keyword-typeahead", description=__doc__.splitlines()[1])
    p.add_argument("--config", default="config.json", help="path to the JSON config")
    p.add_argument("-v", "--verbose", action="store_true", help="log debug output")
    p.add_argument("--offline", action="store_true", help="use built-in sample users/topics")
    sub = p.add_subparsers(dest="command")

    t = sub.add_parser("tui", help="interactive search box (default)")
    # also accepted after the subcommand; SUPPRESS leaves a top-level --offline intact
    t.add_argument("--offline", action="store_true", default=argparse.SUPPRESS)

    lk = sub.add_parser("lookup", help="one-shot lookup, e.g. 'from:al'")
    lk.add_argument("text")
    lk.add_argument("--offline", action="store_true", default=argparse.SUPPRESS)

    c = sub.add_parser("config", help="show or set options")
    c.add_argument("option", nargs="*")
    return p


def main(argv=None):
    args = build_parser().parse_args(argv)
    cfg = Config(args.config)
    command = args.command or "tui"
    Log.setup(
        cfg.get("log_path"),
        "DEBUG" if args.verbose else cfg.get("log_level"),
        echo=args.verbose and command != "tui",
    )
    if command == "tui":
        return cmd_tui(cfg, args)
    if command == "lookup":
        return cmd_lookup(cfg, args)
    return cmd_config(cfg, args)


if __name__ == "__main__":
    sys.exit(main())
