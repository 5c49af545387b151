import os
import sys
import logging

from errors import PaymentsError
from payments_engine import PaymentsEngine
from report_writer import write_accounts

DEFAULT_LOG_LEVEL = logging.WARNING


def log_level_from_env() -> int:
    """Standard level name from PAYMENTS_LOG_LEVEL, WARNING when unset or unknown."""
    name = os.environ.get("PAYMENTS_LOG_LEVEL", "").strip().upper()
    level = logging.getLevelName(name)
    if isinstance(level, int):
        return level
    return DEFAULT_LOG_LEVEL


logging.basicConfig(
    level=log_level_from_env(),
    format="%(levelname)s: %(message)s",
    stream=sys.stderr,
)


def strict_from_env() -> bool:
    return os.environ.get("PAYMENTS_STRICT", "").strip().lower() in ("1", "true", "yes")


def main():
    if len(sys.argv) != 2:
        print("Usage: python main.py <input.csv>", file=sys.stderr)
        sys.exit(1)

    filepath = sys.argv[1]
    engine = PaymentsEngine(strict=strict_from_env())
    try:
        accounts = engine.process_file(filepath)
        write_accounts(accounts, sys.stdout)
    except PaymentsError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(
        f"Applied: {engine.stats.applied}, "
        f"Ignored: {engine.stats.ignored}, "
        f"Skipped rows: {engine.stats.skipped_rows}",
        file=sys.stderr
    )


if __name__ == "__main__":
    main()
