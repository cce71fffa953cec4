# Project: aqi-insights
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
cli.py — Command-line interface for aqi-insights.

Commands:
  aqi-insights login --token TOKEN   — store the session token
  aqi-insights logout                — forget the session token
  aqi-insights report                — fetch readings + print the analysis
  aqi-insights analyze FILE          — analyse a local JSON/CSV file
  aqi-insights status                — show login state and last run info
"""

import argparse
from pathlib import Path

from aqi_insights.analysis import analyze, terminal_summary
from aqi_insights.chart import render_daily_table, render_seasonal_chart, render_yearly_chart
from aqi_insights.client import SessionExpiredError, fetch_air_data, fetch_user
from aqi_insights.config import DEFAULT_TITLE, load_config
from aqi_insights.records import MalformedRecordError, MeasurementRecord, read_records_file
from aqi_insights.session import clear_token, load_token, save_token
from aqi_insights.utils import read_last_run, write_last_run


def _print_report(title: str, records: list[MeasurementRecord], args) -> None:
    """Print the summary and, if requested, the charts and daily table."""
    report = analyze(records)
    print()
    print(terminal_summary(title, report))
    if getattr(args, "charts", False):
        print()
        print(render_yearly_chart(report["yearly"]))
        print()
        print(render_seasonal_chart(report["seasonal"]))
    if getattr(args, "table", False):
        print()
        print(render_daily_table(records))


def cmd_login(args) -> None:
    """Save the bearer token used for the air-data service."""
    config = load_config()
    token_path = Path(config["api"]["token_file"])
    try:
        save_token(args.token, token_path)
    except ValueError as e:
        print(f"[error] {e}")
        raise SystemExit(1)
    print(f"[session] Token saved to {token_path}.")


def cmd_logout(args) -> None:
    """Remove the stored bearer token."""
    config = load_config()
    clear_token(Path(config["api"]["token_file"]))
    print("[session] Logged out.")


def cmd_report(args) -> None:
    """Fetch the user's readings from the service and print the analysis."""
    config = load_config()
    api = config["api"]
    token_path = Path(api["token_file"])
    log_dir = Path(config["log"]["path"]).parent

    token = load_token(token_path)
    if token is None:
        print("[session] Not logged in. Run: aqi-insights login --token <TOKEN>")
        raise SystemExit(1)

    try:
        user = fetch_user(api["url"], token, timeout=api["timeout"])
        print(f"👤 Signed in as {user['name']}")
        records = fetch_air_data(api["url"], token, timeout=api["timeout"])
    except SessionExpiredError as e:
        clear_token(token_path)
        print(f"[session] {e}. Logged out — run login again.")
        write_last_run("ERROR", "Session expired", log_dir=log_dir)
        raise SystemExit(1)
    except (RuntimeError, MalformedRecordError) as e:
        print(f"[error] {e}")
        write_last_run("ERROR", str(e).replace("|", "-"), log_dir=log_dir)
        raise SystemExit(1)

    _print_report(config["report"]["title"], records, args)
    write_last_run("OK", f"{len(records)} readings", log_dir=log_dir)


def cmd_analyze(args) -> None:
    """Analyse readings from a local file; no config or network needed."""
    try:
        records = read_records_file(Path(args.file))
    except MalformedRecordError as e:
        print(f"[error] {args.file}: {e}")
        raise SystemExit(1)
    except (FileNotFoundError, ValueError) as e:
        print(f"[error] {e}")
        raise SystemExit(1)

    _print_report(args.title, records, args)


def cmd_status(args) -> None:
    """Show login state, last run info and log file size."""
    config = load_config()
    log_path = Path(config["log"]["path"])
    log_dir = log_path.parent

    logged_in = load_token(Path(config["api"]["token_file"])) is not None
    session_status = "✅ Logged in" if logged_in else "❌ Logged out"

    last = read_last_run(log_dir)
    if last:
        last_run_time = last["timestamp"]
        if last["status"] == "OK":
            last_result = f"✅ {last['detail']}"
        else:
            last_result = f"❌ {last['detail']}"
    else:
        last_run_time = "Never"
        last_result = "—"

    if log_path.exists():
        size_kb = log_path.stat().st_size // 1024
        log_info = f"{log_path} ({size_kb} KB)"
    else:
        log_info = f"{log_path} (not created yet)"

    sep = "─" * 45
    print("\n🔧 AQI Insights — Status")
    print(sep)
    print(f"  Service:     {config['api']['url']}")
    print(f"  Session:     {session_status}")
    print(f"  Last run:    {last_run_time}")
    print(f"  Last result: {last_result}")
    print(f"  Log file:    {log_info}")
    print(sep)


def _add_output_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--charts", action="store_true", help="Show yearly and seasonal bar charts")
    parser.add_argument("--table", action="store_true", help="List every reading")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="aqi-insights",
        description="Air-quality summary, trend and seasonal analysis",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="command")
    subparsers.required = True

    p_login = subparsers.add_parser("login", help="Store the air-data service token")
    p_login.add_argument("--token", required=True, metavar="TOKEN", help="Bearer token")
    subparsers.add_parser("logout", help="Remove the stored token")

    p_report = subparsers.add_parser("report", help="Fetch readings and print the analysis")
    _add_output_flags(p_report)

    p_analyze = subparsers.add_parser("analyze", help="Analyse a local .json or .csv file")
    p_analyze.add_argument("file", metavar="FILE", help="Readings file with date, aqi and pm25 fields")
    p_analyze.add_argument("--title", default=DEFAULT_TITLE, help="Report heading")
    _add_output_flags(p_analyze)

    subparsers.add_parser("status", help="Show login state and last run info")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    commands = {
        "login": cmd_login,
        "logout": cmd_logout,
        "report": cmd_report,
        "analyze": cmd_analyze,
        "status": cmd_status,
    }
    commands[args.command](args)


if __name__ == "__main__":
    main()
