"""Console front-end for the Agenda day planner."""
from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Optional, Sequence

from agenda.core.errors import AgendaError
from agenda.core.priorities import Priority, priority_label
from agenda.core.settings import CONFIG_PATH, LOGGING
from agenda.helpers.clock import local_today
from agenda.helpers.datetime_utils import parse_date_input, to_date_key
from agenda.models.task_record import TaskRecord
from agenda.services.calendar import month_overview
from agenda.services.daily_log import DailyLogService
from agenda.services.daily_tasks import DailyTaskService
from agenda.services.identity import annotation_date
from agenda.storage.config import load_config, update_config
from agenda.storage.db import init_db
from agenda.storage.partition_store import PartitionStore

logger = logging.getLogger("agenda")


def _setup_logging(log_path: Path, *, verbose: bool = False) -> None:
    log_path.parent.mkdir(parents=True, exist_ok=True)
    root = logging.getLogger("agenda")
    root.setLevel(logging.DEBUG if verbose else LOGGING.level)
    formatter = logging.Formatter(LOGGING.format)
    if not any(isinstance(h, RotatingFileHandler) for h in root.handlers):
        handler = RotatingFileHandler(
            log_path,
            maxBytes=LOGGING.max_bytes,
            backupCount=LOGGING.backup_count,
            encoding="utf-8",
        )
        handler.setFormatter(formatter)
        root.addHandler(handler)
    if verbose:
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(formatter)
        root.addHandler(console)


def _resolve_day(value: Optional[str], *, last: bool, config_path: Path) -> date:
    if value:
        parsed = parse_date_input(value)
        if parsed is None:
            raise ValueError(f"Unrecognised date: {value!r} (use YYYY-MM-DD or DD.MM.YYYY)")
        return parsed
    if last:
        remembered = load_config(config_path).last_viewed_date
        if remembered:
            return date.fromisoformat(remembered)
    return local_today()


def _origin_day(tasks: DailyTaskService, day: date, task_id: str) -> date:
    task = next((t for t in tasks.list_day(day) if t.id == task_id), None)
    if task is None:
        raise ValueError(f"No task {task_id} on {to_date_key(day)}")
    # the annotation has no year; take the one of the day the task is on
    origin = annotation_date(task.text, today=day)
    if origin is None:
        raise ValueError(f"Task {task_id} was not carried from an earlier day")
    return origin


def _format_task(task: TaskRecord) -> str:
    mark = "x" if task.completed else " "
    label = priority_label(task.priority, short=True)
    return f"[{mark}] {task.text}  ({label})  {task.id}"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="agenda", description=__doc__ or "")
    parser.add_argument(
        "--log",
        type=Path,
        default=LOGGING.path,
        help="Path to a log file (default: %(default)s)",
    )
    parser.add_argument("--verbose", action="store_true", help="Mirror log output to stderr")
    sub = parser.add_subparsers(dest="command", required=True)

    def day_args(p: argparse.ArgumentParser) -> None:
        p.add_argument("--date", dest="day", help="Day to act on (default: today)")
        p.add_argument("--last", action="store_true", help="Use the last viewed day")

    show = sub.add_parser("show", help="Open a day, carrying unfinished tasks forward")
    show.add_argument("day", nargs="?", help="Day to open (default: today)")
    show.add_argument("--last", action="store_true", help="Reopen the last viewed day")
    show.add_argument(
        "--origin",
        metavar="TASK_ID",
        help="Open the day a carried task of this day was first added on",
    )

    add = sub.add_parser("add", help="Add a task")
    add.add_argument("text")
    add.add_argument("--priority", choices=[p.value for p in Priority], default=None)
    day_args(add)

    toggle = sub.add_parser("toggle", help="Mark a task done or not done")
    toggle.add_argument("task_id")
    day_args(toggle)

    edit = sub.add_parser("edit", help="Change the text or priority of a task")
    edit.add_argument("task_id")
    edit.add_argument("--text")
    edit.add_argument("--priority", choices=[p.value for p in Priority], default=None)
    day_args(edit)

    delete = sub.add_parser("delete", help="Delete a task")
    delete.add_argument("task_id")
    day_args(delete)

    log = sub.add_parser("log", help="Show or replace the journal entry of a day")
    log.add_argument("text", nargs="?")
    day_args(log)

    month = sub.add_parser("month", help="Month overview")
    month.add_argument("year", nargs="?", type=int)
    month.add_argument("month", nargs="?", type=int)
    return parser


def run(
    args: argparse.Namespace,
    *,
    store: Optional[PartitionStore] = None,
    config_path: Path = CONFIG_PATH,
) -> List[str]:
    """Execute a parsed command and return the lines to print."""

    tasks = DailyTaskService(store)
    lines: List[str] = []

    if args.command == "month":
        today = local_today()
        year = args.year or today.year
        month = args.month or today.month
        lines.append(f"{year:04d}-{month:02d}")
        lines.append(" ".join(name.rjust(3) for name in ("Mo", "Tu", "We", "Th", "Fr", "Sa", "Su")))
        for week in month_overview(tasks.store, year, month):
            cells = []
            for marker in week:
                if not marker.in_month:
                    cells.append("   ")
                    continue
                # "*" unfinished tasks, "+" journal only
                flag = "*" if marker.has_pending_tasks else ("+" if marker.has_log else " ")
                cells.append(f"{marker.day.day:>2}{flag}")
            lines.append(" ".join(cells).rstrip())
        return lines

    day = _resolve_day(args.day, last=args.last, config_path=config_path)
    date_key = to_date_key(day)

    if args.command == "show":
        if args.origin:
            day = _origin_day(tasks, day, args.origin)
            date_key = to_date_key(day)
        view = tasks.open_day(day)
        update_config(config_path, last_viewed_date=date_key)
        lines.append(date_key)
        if not view.readable:
            lines.append("! stored tasks for this day could not be read")
        if not view.durable:
            lines.append("! carried tasks could not be saved; they will be retried next time")
        if not view.tasks:
            lines.append("No tasks for this day.")
        lines.extend(_format_task(task) for task in view.tasks)
    elif args.command == "add":
        priority = args.priority or load_config(config_path).default_priority
        task = tasks.add(day, args.text, priority)
        lines.append(_format_task(task))
    elif args.command == "toggle":
        task = tasks.toggle(day, args.task_id)
        lines.append(_format_task(task) if task else f"No task {args.task_id} on {date_key}")
    elif args.command == "edit":
        task = tasks.update(day, args.task_id, text=args.text, priority=args.priority)
        lines.append(_format_task(task) if task else f"No task {args.task_id} on {date_key}")
    elif args.command == "delete":
        removed = tasks.delete(day, args.task_id)
        lines.append("Deleted." if removed else f"No task {args.task_id} on {date_key}")
    elif args.command == "log":
        journal = DailyLogService(tasks.store)
        if args.text is not None:
            journal.save(day, args.text)
        lines.append(journal.get(day) or "(empty)")
    return lines


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.log, verbose=args.verbose)

    init_db()
    try:
        for line in run(args):
            print(line)
    except (AgendaError, ValueError) as exc:
        logger.error("%s failed: %s", args.command, exc)
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
