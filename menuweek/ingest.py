#!/usr/bin/env python3
"""Fetch all configured canteen pages and write weekly menu documents.

For every ISO week found on any page two JSON files are written:
``<output>/<YYYY-Www>.json`` indexed by canteen and
``<output>/by-day/<YYYY-Www>.json`` indexed by date. Files whose content
did not change are left untouched.

All pages are fetched and parsed before anything is written, so a failing
canteen never leaves a partial set of documents behind.

Usage examples:
  python3 -m menuweek.ingest
  python3 -m menuweek.ingest --output-dir public/menus --notify-cmd '/usr/bin/notify-send'

Notification on error: set environment variable `MENSA_NOTIFY_CMD` or pass
`--notify-cmd` to run a small handler with subject and body as args.
"""

import argparse
import dataclasses
import datetime
import functools
import logging
import subprocess
import sys
import traceback
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from menuweek import config
from menuweek.aggregate import WeekAggregator, build_day_grouped_week
from menuweek.fetch import fetch_document
from menuweek.models import OutputWeek
from menuweek.parser import parse_menu_page
from menuweek.store import keep_stored_timestamp, write_if_changed

log = logging.getLogger(__name__)

Fetcher = Callable[[str], str]


def utc_timestamp(now: Optional[datetime.datetime] = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a ``Z`` suffix."""
    now = now or datetime.datetime.now(datetime.timezone.utc)
    return now.astimezone(datetime.timezone.utc).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )


def collect_weeks(
    canteens: Iterable[config.CanteenConfig],
    fetch: Fetcher,
    generated_at: str,
    today: Optional[datetime.date] = None,
) -> List[Tuple[str, OutputWeek]]:
    """Fetch and parse every canteen, one after the other.

    Any error from fetching or parsing propagates and aborts the run.

    Returns:
        ``(week_key, OutputWeek)`` pairs sorted by week key.
    """
    aggregator = WeekAggregator(generated_at)
    for canteen in canteens:
        log.info("Fetching menus for %s ...", canteen.name)
        html = fetch(canteen.url)
        parsed = parse_menu_page(html, today=today)
        log.info("Parsed %d days for %s", len(parsed.days), canteen.slug)
        if parsed.legend is None:
            log.warning("No legend found for %s", canteen.slug)
        aggregator.add(canteen, parsed)
    return aggregator.build()


def write_weeks(weeks: Sequence[Tuple[str, OutputWeek]], output_dir: Path) -> List[Path]:
    """Write both documents of each week; return the paths actually written."""
    written: List[Path] = []
    for key, week in weeks:
        by_week_path = output_dir / f"{key}.json"
        by_week = keep_stored_timestamp(by_week_path, week.to_dict())
        # the day view must carry the same timestamp as the canteen view
        stable = dataclasses.replace(week, generated_at=by_week["generatedAt"])
        by_day = build_day_grouped_week(stable).to_dict()
        by_day_path = output_dir / "by-day" / f"{key}.json"

        for path, payload in ((by_week_path, by_week), (by_day_path, by_day)):
            if write_if_changed(path, payload):
                log.info("Wrote %s", path)
                written.append(path)
            else:
                log.info("Unchanged %s", path)
    return written


def run(
    output_dir: Path,
    fetch: Fetcher = fetch_document,
    canteens: Iterable[config.CanteenConfig] = config.CANTEENS,
    today: Optional[datetime.date] = None,
    generated_at: Optional[str] = None,
) -> List[Path]:
    """Collect all canteens and write the weekly documents."""
    weeks = collect_weeks(canteens, fetch, generated_at or utc_timestamp(), today=today)
    if not weeks:
        log.warning("No menu data collected for the configured canteens.")
        return []
    return write_weeks(weeks, output_dir)


def notify_if_configured(cmd: Optional[str], subject: str, body: str) -> None:
    """Invoke a notification command if configured.

    The command is executed with `subject` and `body` as positional
    arguments. Failures are intentionally non-fatal and only logged.

    Args:
        cmd: optional command to execute.
        subject: short subject passed as first argument to the command
        body: longer body passed as second argument to the command
    """
    if not cmd:
        return
    try:
        subprocess.run([cmd, subject, body], check=False)
    except OSError:
        log.exception("Notification failed")


def main(argv: Optional[Sequence[str]] = None) -> None:
    """CLI entry point; exits non-zero when any canteen fails."""
    config.load_env()
    settings = config.load_settings()

    p = argparse.ArgumentParser(description="Fetch canteen menus into weekly JSON files")
    p.add_argument(
        "--output-dir",
        default=str(settings.output_dir),
        help="Directory for the weekly JSON files (env MENSA_OUTPUT_DIR)",
    )
    p.add_argument(
        "--timeout",
        type=float,
        default=settings.request_timeout,
        help="Request timeout in seconds (env MENSA_REQUEST_TIMEOUT)",
    )
    p.add_argument(
        "--notify-cmd",
        default=settings.notify_cmd,
        help="Optional notify command to run on failure (env MENSA_NOTIFY_CMD)",
    )
    p.add_argument("--log-level", default=settings.log_level, help="Logging level")
    args = p.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        run(
            Path(args.output_dir),
            fetch=functools.partial(fetch_document, timeout=args.timeout),
        )
    except Exception:
        tb = traceback.format_exc()
        log.error("Error during menu ingest:\n%s", tb)
        notify_if_configured(args.notify_cmd, "Mensa menu ingest failed", tb)
        # exit non-zero so cron detects failure
        sys.exit(1)


if __name__ == "__main__":
    main()
