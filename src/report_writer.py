import csv
import logging
from typing import Mapping, TextIO

from errors import ReportWriteError
from models import ClientAccount

logger = logging.getLogger(__name__)

HEADER = ["client", "available", "held", "total", "locked"]


def format_account(account: ClientAccount) -> list:
    return [
        account.client_id,
        str(account.available),
        str(account.held),
        str(account.total),
        str(account.locked).lower(),
    ]


def write_accounts(accounts: Mapping[int, ClientAccount], stream: TextIO) -> None:
    """Write one CSV row per account, monetary columns with 4 decimal places."""
    writer = csv.writer(stream, lineterminator="\n")
    try:
        writer.writerow(HEADER)
        for account in accounts.values():
            writer.writerow(format_account(account))
        stream.flush()
    except (OSError, csv.Error) as e:
        logger.error(f"Failed to write account report: {e}")
        raise ReportWriteError(f"Failed to write account report: {e}") from e
