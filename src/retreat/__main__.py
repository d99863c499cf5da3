"""retreat CLI entry point.

Walks through the undo/redo history the way an application would drive it,
printing each operation and the value in view.

Usage:
    python -m retreat                           # Default config
    python -m retreat --config custom.yaml      # Custom config
    python -m retreat --capacity 3              # Override first history's capacity
    python -m retreat --log-level DEBUG         # Show evictions and clears
"""

from __future__ import annotations

import argparse
import sys
from typing import Callable

from omegaconf import OmegaConf

from retreat.core.config import RetreatConfig
from retreat.errors import ConfigurationError
from retreat.history.buffer import HistoryBuffer
from retreat.history.config import HistoryConfig
from retreat.utils.logging import setup_logging

Echo = Callable[[str], None]


def _show(history: HistoryBuffer, echo: Echo) -> None:
    echo(f" V: {history.get()}")


def walk_basic(config: HistoryConfig, echo: Echo = print) -> HistoryBuffer[int]:
    """Push three values, undo back to the first and redo forward again."""
    history: HistoryBuffer[int] = HistoryBuffer.from_config(config)
    echo(f"=== INIT (cap {history.capacity}) ===")
    for n in (1, 2, 3):
        echo(f"OP: push({n})")
        history.push(n)
        _show(history, echo)
    for op in ("undo", "undo", "redo", "redo"):
        echo(f"OP: {op}()")
        getattr(history, op)()
        _show(history, echo)
    return history


def walk_bounded(echo: Echo = print) -> HistoryBuffer[int]:
    """Overflow a capacity-3 ring so only the last three values remain."""
    history: HistoryBuffer[int] = HistoryBuffer(3)
    echo("=== INIT (cap 3) ===")
    values = (10, 20, 30, 40, 50)
    echo(f"OP: push({', '.join(str(v) for v in values)})")
    for v in values:
        history.push(v)
    _show(history, echo)
    echo(f"Size: {history.get_size()}")
    for _ in range(2):
        echo("OP: undo()")
        history.undo()
        _show(history, echo)
    echo(f"U?: {history.can_undo()}")
    return history


def walk_cleanup(echo: Echo = print) -> HistoryBuffer[int]:
    """Show which values the cleanup hook receives on eviction and clear."""
    history: HistoryBuffer[int] = HistoryBuffer(2, lambda n: echo(f"CL: {n}"))
    echo("=== CLEANUP (cap 2) ===")
    for n in (100, 200, 300):
        echo(f"OP: push({n})")
        history.push(n)
        _show(history, echo)
    echo("OP: undo()")
    history.undo()
    _show(history, echo)
    echo("OP: push(400)")
    history.push(400)
    _show(history, echo)
    echo("OP: clear()")
    history.clear()
    _show(history, echo)
    return history


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="retreat",
        description="retreat - ring-buffer undo/redo history walkthrough",
    )
    parser.add_argument(
        "--config",
        "-c",
        default="config/default.yaml",
        help="Path to configuration YAML file (default: config/default.yaml)",
    )
    parser.add_argument(
        "--capacity",
        type=int,
        default=None,
        help="Override history capacity for the first walkthrough",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Set logging level",
    )
    parser.add_argument(
        "--validate-config",
        action="store_true",
        default=False,
        help="Validate config against Pydantic schema before starting",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Path to log file (default: no file logging)",
    )
    parser.add_argument(
        "--log-json",
        action="store_true",
        default=False,
        help="Output logs as JSON instead of human-readable",
    )
    args = parser.parse_args(argv)

    config = RetreatConfig(args.config)
    try:
        cfg = config.load(validate=args.validate_config)
    except FileNotFoundError:
        print(f"Error: Config file not found: {args.config}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Error: Config validation failed:\n{e}", file=sys.stderr)
        return 1

    if args.capacity is not None:
        config.override("retreat.history.capacity", args.capacity)

    log_level = args.log_level or OmegaConf.select(cfg, "retreat.system.log_level", default="INFO")
    log_file = args.log_file or OmegaConf.select(cfg, "retreat.system.log_file", default=None)
    log_json = args.log_json or OmegaConf.select(cfg, "retreat.system.log_json", default=False)
    setup_logging(log_level, log_file=log_file, log_json=log_json)

    try:
        walk_basic(config.history())
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print()
    walk_bounded()
    print()
    walk_cleanup()
    return 0


if __name__ == "__main__":
    sys.exit(main())
