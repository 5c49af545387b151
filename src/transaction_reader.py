import csv
import logging
from decimal import Decimal, InvalidOperation
from typing import Dict, Iterator, List, Optional, TextIO

from amount import Amount
from errors import InputSourceError, TransactionParseError
from models import Transaction, TransactionType

logger = logging.getLogger(__name__)

MAX_CLIENT_ID = 2**16 - 1
MAX_TRANSACTION_ID = 2**32 - 1
MAX_AMOUNT = Amount(2**63 - 1).to_decimal()

AMOUNT_REQUIRED = {TransactionType.DEPOSIT, TransactionType.WITHDRAWAL}


class TransactionReader:
    """
    Streams Transactions out of CSV input with a `type, client, tx, amount` header.

    Fields are trimmed and rows may be shorter than the header, so dispute
    rows can omit the amount column entirely.

    In strict mode the first malformed row raises TransactionParseError.
    Otherwise malformed rows are logged, counted in skipped_rows and skipped.
    """

    def __init__(self, stream: TextIO, strict: bool = False, owns_stream: bool = False):
        self._stream = stream
        self._strict = strict
        self._owns_stream = owns_stream
        self.skipped_rows = 0

    @classmethod
    def from_path(cls, filepath: str, strict: bool = False) -> "TransactionReader":
        """Open a CSV file for reading. Use as a context manager to close it."""
        try:
            stream = open(filepath, "r", newline="")
        except OSError as e:
            logger.error(f"Failed to open {filepath}: {e}")
            raise InputSourceError(f"Failed to open {filepath}: {e}") from e
        return cls(stream, strict=strict, owns_stream=True)

    def __enter__(self) -> "TransactionReader":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_stream:
            self._stream.close()

    def __iter__(self) -> Iterator[Transaction]:
        rows = csv.DictReader(self._stream)
        while True:
            try:
                row = next(rows)
            except StopIteration:
                return
            except csv.Error as e:
                self._reject(TransactionParseError(str(e), rows.line_num))
                continue
            except (OSError, UnicodeDecodeError) as e:
                raise InputSourceError(f"Failed to read transactions: {e}") from e

            try:
                transaction = parse_row(row, rows.line_num)
            except TransactionParseError as e:
                self._reject(e)
                continue
            yield transaction

    def read_all(self) -> List[Transaction]:
        """Read the whole input before anything is applied."""
        return list(self)

    def _reject(self, error: TransactionParseError) -> None:
        if self._strict:
            raise error
        self.skipped_rows += 1
        logger.warning(f"Skipping malformed row: {error}")


def parse_row(row: Dict[Optional[str], Optional[str]], line_number: Optional[int] = None) -> Transaction:
    """Parse CSV row into Transaction."""
    if None in row:
        raise TransactionParseError(f"too many fields: {row[None]}", line_number, row)

    normalized = {k.strip(): (v or "").strip() for k, v in row.items()}

    try:
        transaction_type_str = normalized["type"].lower()
        client_str = normalized["client"]
        transaction_id_str = normalized["tx"]
    except KeyError as e:
        raise TransactionParseError(f"missing column {e}", line_number, row) from e

    try:
        transaction_type = TransactionType(transaction_type_str)
    except ValueError as e:
        raise TransactionParseError(f"unknown transaction type '{transaction_type_str}'", line_number, row) from e

    client_id = _parse_id(client_str, "client", MAX_CLIENT_ID, line_number, row)
    transaction_id = _parse_id(transaction_id_str, "tx", MAX_TRANSACTION_ID, line_number, row)

    amount = None
    if transaction_type in AMOUNT_REQUIRED:
        amount = _parse_amount(normalized.get("amount", ""), line_number, row)

    return Transaction(
        transaction_type=transaction_type,
        client_id=client_id,
        transaction_id=transaction_id,
        amount=amount,
    )


def _parse_id(value: str, column: str, maximum: int, line_number: Optional[int], row) -> int:
    if not (value.isascii() and value.isdigit()):
        raise TransactionParseError(f"{column} '{value}' is not an unsigned integer", line_number, row)
    parsed = int(value)
    if not 0 <= parsed <= maximum:
        raise TransactionParseError(f"{column} {parsed} out of range 0..{maximum}", line_number, row)
    return parsed


def _parse_amount(value: str, line_number: Optional[int], row) -> Amount:
    if not value:
        raise TransactionParseError("amount is required", line_number, row)
    try:
        parsed = Decimal(value)
    except InvalidOperation as e:
        raise TransactionParseError(f"amount '{value}' is not a decimal number", line_number, row) from e
    if not parsed.is_finite():
        raise TransactionParseError(f"amount '{value}' is not a finite number", line_number, row)
    if parsed.copy_abs() > MAX_AMOUNT:
        raise TransactionParseError(f"amount '{value}' out of range", line_number, row)
    return Amount.from_decimal(parsed)
