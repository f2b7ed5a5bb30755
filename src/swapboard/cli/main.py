from __future__ import annotations

import argparse
import datetime as dt
import json
import sys
import time

from swapboard.config import settings
from swapboard.config.logging import setup_logging
from swapboard.core.errors import DataSourceError, InvalidTokenAddress, UnsupportedNetwork
from swapboard.core.models import LeaderboardConfig, LeaderboardReport
from swapboard.services.leaderboard_service import LeaderboardService, build_demo_report
from swapboard.io.output_writer import (
    format_leaderboard_table,
    format_summary,
    write_leaderboard_json,
    write_summary_md,
)
from swapboard.io.schemas import report_to_dict

from swapboard.adapters.subgraph.subgraph_swap_adapter import SubgraphSwapAdapter


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="swapboard", description="Uniswap v3 trader leaderboard for a token")
    p.add_argument("--token", "-t", required=False, help="Token contract address (not required with --demo)")
    p.add_argument("--limit", "-l", type=int, default=settings.DEFAULT_LIMIT, help="Traders to show")
    p.add_argument("--network", default=settings.DEFAULT_NETWORK,
                   help=f"Network to query ({', '.join(settings.NETWORKS)})")
    p.add_argument("--demo", action="store_true", help="Use built-in sample traders instead of the subgraph")
    p.add_argument("--target-swaps", type=int, default=settings.TARGET_SWAPS, help="Stop after this many swaps")
    p.add_argument("--batch-size", type=int, default=settings.BATCH_SIZE, help="Swaps per page request")
    p.add_argument("--start-block", type=int, default=None, help="Drop fetched swaps before this block")
    p.add_argument("--end-block", type=int, default=None, help="Drop fetched swaps after this block")
    p.add_argument("--out", default=None, help="Write leaderboard.json and summary.md to this folder")
    p.add_argument("--json", action="store_true", help="Print the leaderboard as JSON instead of a table")
    p.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p


def _make_progress_reporter(cfg: LeaderboardConfig):
    start_time = time.time()
    is_tty = sys.stderr.isatty()

    def _ts() -> str:
        return dt.datetime.now().strftime("%H:%M:%S")

    def _print_line(message: str) -> None:
        if is_tty:
            sys.stderr.write("\r" + message.ljust(72))
            sys.stderr.flush()
        else:
            print(message, file=sys.stderr)

    def _clear_line() -> None:
        if is_tty:
            sys.stderr.write("\r" + (" " * 72) + "\r")
            sys.stderr.flush()

    def progress(event: str, data: dict) -> None:
        if event == "start":
            print(f"[{_ts()}] Fetching swaps for {data['token']} on {data['network']} "
                  f"(target {cfg.target_swaps})", file=sys.stderr)
            return
        if event == "fetch":
            _print_line(f"Requesting swaps {data['skip']}..{data['skip'] + data['first']}...")
            return
        if event == "fetch_done":
            _print_line(f"Fetched {data['count']} swaps (total: {data['total']})")
            return
        if event == "done":
            _clear_line()
            elapsed = time.time() - start_time
            print(
                f"[{_ts()}] Done in {elapsed:.1f}s • "
                f"{data['swaps']} swaps • {data['traders']} traders • {data['skipped']} skipped",
                file=sys.stderr,
            )
            return
        if event == "error":
            _clear_line()
            print(f"[{_ts()}] Error: {data.get('message', 'Unknown error')}", file=sys.stderr)

    return progress


def _render(report: LeaderboardReport, args: argparse.Namespace) -> None:
    if args.json:
        print(json.dumps(report_to_dict(report), indent=2, ensure_ascii=False))
    else:
        print(format_leaderboard_table(report.entries))
        print()
        print(format_summary(report.summary))

    if args.out:
        print(f"Wrote: {write_leaderboard_json(report, args.out)}", file=sys.stderr)
        print(f"Wrote: {write_summary_md(report, args.out)}", file=sys.stderr)


def main(argv=None) -> int:
    args = build_arg_parser().parse_args(argv)
    setup_logging(args.log_level)

    if args.limit < 0:
        print("--limit must be >= 0", file=sys.stderr)
        return 2

    if args.demo:
        print("Running in DEMO mode with sample data", file=sys.stderr)
        _render(build_demo_report(args.limit, network=args.network), args)
        return 0

    if not args.token:
        print("Token address is required when not in demo mode. Use --token <ADDRESS> or --demo.", file=sys.stderr)
        return 2

    cfg = LeaderboardConfig(
        token_address=args.token,
        limit=args.limit,
        network=args.network,
        target_swaps=args.target_swaps,
        page_size=args.batch_size,
        start_block=args.start_block,
        end_block=args.end_block,
    )
    progress = _make_progress_reporter(cfg)

    try:
        source = SubgraphSwapAdapter(network=cfg.network)
        report = LeaderboardService(source).build(cfg, on_progress=progress)
    except (InvalidTokenAddress, UnsupportedNetwork, ValueError) as exc:
        progress("error", {"message": str(exc)})
        return 2
    except DataSourceError as exc:
        progress("error", {"message": f"{exc.__class__.__name__}: {exc}"})
        return 1

    if report.swaps_fetched == 0:
        print("No swaps found for this token. It may have no recent activity, the address may be wrong, "
              "or it may not trade on Uniswap v3 on this network (try --network or --demo).", file=sys.stderr)

    _render(report, args)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
