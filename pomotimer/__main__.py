"""Command-line front end: ``python -m pomotimer <command>``."""

from __future__ import annotations

import argparse
import dataclasses
import logging
import signal
import sys
from datetime import timedelta
from pathlib import Path

from .app import build_engine
from .database.history import HistoryRecorder, as_utc
from .errors import PomoTimerError
from .timer.engine import TimerEngine, duration_for
from .timer.state import Mode, SessionState


logger = logging.getLogger("pomotimer")

_MODE_LABELS = {
    "work": "Work",
    "short_break": "Short break",
    "long_break": "Long break",
    "": "Not started",
}


def _fmt(delta: timedelta) -> str:
    m, s = divmod(max(0, int(delta.total_seconds())), 60)
    return f"{m:02d}:{s:02d}"


def _describe(state: SessionState) -> str:
    label = _MODE_LABELS.get(state.mode, f"Unknown ({state.mode})")
    if state.paused:
        label += " (paused)"
    return f"{label}, {state.completed_work_sessions} work session(s) completed"


# ── commands ──────────────────────────────────────────────────────────────


def cmd_start(engine: TimerEngine, args: argparse.Namespace) -> None:
    engine.start()
    focus = duration_for(Mode.WORK, engine.settings())
    print(f"Started: {_fmt(focus)} of focus")


def cmd_pause(engine: TimerEngine, args: argparse.Namespace) -> None:
    print(_describe(engine.pause()))


def cmd_resume(engine: TimerEngine, args: argparse.Namespace) -> None:
    print(_describe(engine.resume()))


def cmd_reset(engine: TimerEngine, args: argparse.Namespace) -> None:
    engine.reset()
    print("Session cleared")


def cmd_status(engine: TimerEngine, args: argparse.Namespace) -> None:
    remaining = engine.remaining_time()
    elapsed = engine.elapsed_time()
    print(_describe(engine.session_state()))
    print(f"elapsed {_fmt(elapsed)}  remaining {_fmt(remaining)}")


def cmd_next(engine: TimerEngine, args: argparse.Namespace) -> None:
    if not engine.session_state().is_started:
        print("Not started")
        return
    upcoming = engine.preview_next_state()
    print(f"Next: {_describe(upcoming)}")
    print(f"begins at {upcoming.current_mode_started_at.isoformat()}")


def cmd_settings(engine: TimerEngine, args: argparse.Namespace) -> None:
    current = engine.settings()
    changes = {
        name: value
        for name, value in (
            ("work_minutes", args.work),
            ("short_break_minutes", args.short_break),
            ("long_break_minutes", args.long_break),
            ("long_break_interval", args.interval),
            ("auto_start_next", args.auto_start),
        )
        if value is not None
    }
    if changes:
        try:
            current = dataclasses.replace(current, **changes)
        except ValueError as exc:
            raise SystemExit(f"error: {exc}")
        engine.update_settings(current)
    for key, value in current.to_dict().items():
        print(f"{key}: {value}")


def cmd_history(engine: TimerEngine, args: argparse.Namespace) -> None:
    recorder = HistoryRecorder()
    records = recorder.recent(args.limit)
    if not records:
        print("No finished intervals yet")
        return
    for rec in records:
        ended = as_utc(rec.ended_at).astimezone()
        label = _MODE_LABELS.get(rec.mode, rec.mode)
        print(f"{ended:%Y-%m-%d %H:%M}  {label:<12} {rec.duration_seconds // 60:>3} min")


def cmd_watch(engine: TimerEngine, args: argparse.Namespace) -> None:
    from PyQt6.QtCore import QCoreApplication, QTimer

    from .bridge import PomodoroBridge

    app = QCoreApplication.instance() or QCoreApplication(sys.argv[:1])
    # let Ctrl+C stop the event loop
    signal.signal(signal.SIGINT, signal.SIG_DFL)

    bridge = PomodoroBridge(engine)
    bridge.mode_changed.connect(
        lambda mode: print(f"\n── {_MODE_LABELS.get(mode, mode)} ──", flush=True)
    )
    bridge.tick.connect(
        lambda secs: print(f"\r{_fmt(timedelta(seconds=secs))}", end="", flush=True)
    )
    bridge.error_occurred.connect(lambda msg: logger.error("%s", msg))

    if args.seconds:
        QTimer.singleShot(args.seconds * 1000, app.quit)
    bridge.start_polling()
    app.exec()
    print()


# ── parser ────────────────────────────────────────────────────────────────


def _bool_arg(value: str) -> bool:
    lowered = value.lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    raise argparse.ArgumentTypeError(f"expected true/false, got {value!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pomotimer", description="Persisted Pomodoro timer."
    )
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="enable debug logging")
    parser.add_argument("--data-dir", type=Path, default=None,
                        help="directory holding settings and session state")
    parser.add_argument("--no-history", action="store_true",
                        help="do not record finished intervals")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("start", help="start a new session").set_defaults(func=cmd_start)
    sub.add_parser("pause", help="pause the session").set_defaults(func=cmd_pause)
    sub.add_parser("resume", help="resume with a fresh interval").set_defaults(func=cmd_resume)
    sub.add_parser("reset", help="clear the session").set_defaults(func=cmd_reset)
    sub.add_parser("status", help="show mode and remaining time").set_defaults(func=cmd_status)
    sub.add_parser("next", help="preview the next mode").set_defaults(func=cmd_next)

    p = sub.add_parser("settings", help="show or change settings")
    p.add_argument("--work", type=int, metavar="MIN")
    p.add_argument("--short-break", type=int, metavar="MIN")
    p.add_argument("--long-break", type=int, metavar="MIN")
    p.add_argument("--interval", type=int, metavar="N",
                   help="long break after every N work sessions")
    p.add_argument("--auto-start", type=_bool_arg, metavar="BOOL")
    p.set_defaults(func=cmd_settings)

    p = sub.add_parser("history", help="list finished intervals")
    p.add_argument("-n", "--limit", type=int, default=20)
    p.set_defaults(func=cmd_history)

    p = sub.add_parser("watch", help="live countdown")
    p.add_argument("--seconds", type=int, default=0,
                   help="stop after this many seconds (0 = until Ctrl+C)")
    p.set_defaults(func=cmd_watch)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    record_history = not args.no_history or args.command == "history"
    try:
        engine = build_engine(args.data_dir, record_history=record_history)
        args.func(engine, args)
    except PomoTimerError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
