from __future__ import annotations

import json
from decimal import Decimal
from pathlib import Path
from typing import List

from swapboard.core.models import LeaderboardEntry, LeaderboardReport, RunSummary
from swapboard.io.schemas import report_to_dict


TABLE_RULE = "═" * 104
TABLE_SUBRULE = "─" * 104


def fmt_usd(x: Decimal) -> str:
    return f"{x:.2f}"


def fmt_ratio(x: Decimal) -> str:
    if x.is_infinite():
        return "∞"
    return f"{x:.2f}"


def fmt_net(x: Decimal) -> str:
    return f"{x:+.4f}"


def write_leaderboard_json(report: LeaderboardReport, out_dir: str, filename: str = "leaderboard.json") -> str:
    p = Path(out_dir)
    p.mkdir(parents=True, exist_ok=True)

    out_path = p / filename
    with out_path.open("w", encoding="utf-8") as f:
        json.dump(report_to_dict(report), f, indent=2, ensure_ascii=False)

    return str(out_path)


def format_leaderboard_table(entries: List[LeaderboardEntry]) -> str:
    lines = [
        "🏆 UNISWAP V3 TRADER LEADERBOARD 🏆",
        TABLE_RULE,
        f"{'Rank':<5} {'Trader Address':<42} {'Buys':<8} {'Sells':<8} "
        f"{'Total Vol USD':<16} {'Net Token Vol':<15} {'Buy/Sell Ratio'}",
        TABLE_SUBRULE,
    ]
    for e in entries:
        lines.append(
            f"{e.rank:<5} {e.address:<42} {e.total_buys:<8} {e.total_sells:<8} "
            f"${fmt_usd(e.total_volume_usd):<15} {fmt_net(e.net_volume_token):<15} "
            f"{fmt_ratio(e.buy_sell_ratio)}"
        )
    if not entries:
        lines.append("(no traders)")
    lines.append(TABLE_RULE)
    return "\n".join(lines)


def format_summary(summary: RunSummary) -> str:
    return "\n".join([
        "📊 SUMMARY STATISTICS",
        "─" * 21,
        f"Total Traders: {summary.total_traders}",
        f"Total Volume (USD): ${fmt_usd(summary.total_volume_usd)}",
        f"Total Buy Transactions: {summary.total_buy_transactions}",
        f"Total Sell Transactions: {summary.total_sell_transactions}",
        f"Average Volume per Trader: ${fmt_usd(summary.average_volume_per_trader)}",
    ])


def write_summary_md(report: LeaderboardReport, out_dir: str, filename: str = "summary.md") -> str:
    """
    Markdown rendition of the leaderboard and run summary.
    """
    p = Path(out_dir)
    p.mkdir(parents=True, exist_ok=True)

    out_path = p / filename
    s = report.summary

    lines = []
    lines.append("# Trader Leaderboard\n\n")
    if report.demo:
        lines.append("_Demo data; no swaps were fetched._\n\n")
    else:
        lines.append(f"- Token: **{report.token_address}**\n")
    lines.append(f"- Network: **{report.network}**\n")
    if not report.demo:
        lines.append(f"- Swaps fetched: **{report.swaps_fetched}**\n")
        lines.append(f"- Swaps skipped: **{report.swaps_skipped}**\n")
    lines.append("\n")

    lines.append("## Summary\n\n")
    lines.append(f"- Total traders: **{s.total_traders}**\n")
    lines.append(f"- Total volume: **{fmt_usd(s.total_volume_usd)} USD**\n")
    lines.append(f"- Buy transactions: **{s.total_buy_transactions}**\n")
    lines.append(f"- Sell transactions: **{s.total_sell_transactions}**\n")
    lines.append(f"- Average volume per trader: **{fmt_usd(s.average_volume_per_trader)} USD**\n\n")

    lines.append("## Top Traders (by USD volume)\n\n")
    if not report.entries:
        lines.append("_No trades found for this token._\n")
    else:
        lines.append("| Rank | Trader | Buys | Sells | Volume USD | Net Token | Buy/Sell |\n")
        lines.append("|---:|---|---:|---:|---:|---:|---:|\n")
        for e in report.entries:
            lines.append(
                f"| {e.rank} | {e.address} | {e.total_buys} | {e.total_sells} "
                f"| {fmt_usd(e.total_volume_usd)} | {fmt_net(e.net_volume_token)} "
                f"| {fmt_ratio(e.buy_sell_ratio)} |\n"
            )

    with out_path.open("w", encoding="utf-8") as f:
        f.writelines(lines)

    return str(out_path)
