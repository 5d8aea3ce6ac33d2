"""histdash command-line interface.

Usage:
  histdash analyze [history_file] [--output report.md]
  histdash query <history_file> top 15
  histdash query <history_file> search "docker"
  histdash serve --port 8000
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from histdash import config
from histdash.errors import HistdashError
from histdash.parsers.history import load_history_file
from histdash.report import default_report_path, write_report
from histdash.services import frequency
from histdash.services.query_engine import QueryEngine, analyze_history, to_jsonable

logger = logging.getLogger("histdash")

QUERY_HELP = """\
Query Types:
  search <pattern>            Search for commands matching pattern
  top [n]                     Show top N commands (default: 10)
  full-commands [n]           Show top N full command lines (default: 10)
  git-analysis                Analyze git command usage
  categories                  Command counts per category
  projects                    Show project directories and common commands
  evolution <command>         Show how command usage evolved over time
  workflows [window-size]     Find common command patterns (default: 5)
  sessions                    Show session information
  recent [n]                  Show N most recent commands (default: 20)
  time-slice <start%> <end%>  Get commands from a time period
  overview                    Totals, sessions and history range

Examples:
  histdash query fish-history.txt search "docker"
  histdash query fish-history.txt top 15
  histdash query fish-history.txt evolution git
  histdash query fish-history.txt time-slice 0 10
"""


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="histdash", description="Shell history analytics")
    sub = parser.add_subparsers(dest="command")

    analyze = sub.add_parser("analyze", help="Write a Markdown analysis report")
    analyze.add_argument("history_file", nargs="?", default=str(config.HISTORY_FILE))
    analyze.add_argument("--output", "-o", default=None, help="Report path (default: next to the history file)")

    query = sub.add_parser(
        "query",
        help="Run a single query and print JSON",
        epilog=QUERY_HELP,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    query.add_argument("history_file")
    query.add_argument("query_type", nargs="?")
    query.add_argument("query_args", nargs=argparse.REMAINDER)

    serve = sub.add_parser("serve", help="Serve the read-only HTTP API")
    serve.add_argument("history_file", nargs="?", default=None)
    serve.add_argument("--host", default=config.HOST)
    serve.add_argument("--port", type=int, default=config.PORT)
    return parser


def _run_analyze(args: argparse.Namespace) -> int:
    history_file = Path(args.history_file)
    analysis = analyze_history(load_history_file(history_file))
    output = Path(args.output) if args.output else default_report_path(history_file)
    write_report(analysis, output)

    print(f"Analysis complete! Report saved to: {output}")
    print()
    print("=== QUICK SUMMARY ===")
    overview = analysis.overview()
    print(f"Total commands: {overview.totalCommands:,}")
    print(f"Sessions detected: {overview.sessionCount}")
    top = frequency.top_commands(analysis.records, 1)
    if top:
        print(f"Top command: {top[0].key} ({top[0].count} times)")
    else:
        print("Top command: n/a")
    return 0


def _run_query(args: argparse.Namespace) -> int:
    if not args.query_type:
        print("histdash query <history-file> <query-type> [args...]")
        print()
        print(QUERY_HELP)
        return 0

    engine = QueryEngine(analyze_history(load_history_file(args.history_file)))
    try:
        result = engine.run(args.query_type, *args.query_args)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(json.dumps(to_jsonable(result), indent=2, ensure_ascii=False))
    return 0


def _run_serve(args: argparse.Namespace) -> int:
    import uvicorn

    from histdash.history_store import history_store

    if args.history_file:
        history_store.set_path(args.history_file)
    uvicorn.run("histdash.main:app", host=args.host, port=args.port)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=config.LOG_LEVEL, stream=sys.stderr)

    handlers = {
        "analyze": _run_analyze,
        "query": _run_query,
        "serve": _run_serve,
    }
    handler = handlers.get(args.command)
    if handler is None:
        parser.print_help()
        return 0

    try:
        return handler(args)
    except HistdashError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
