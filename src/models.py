from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from amount import Amount


class TransactionType(Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    DISPUTE = "dispute"
    RESOLVE = "resolve"
    CHARGEBACK = "chargeback"


class ProcessingResult(Enum):
    APPLIED = "applied"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    UNKNOWN_TRANSACTION = "unknown_transaction"


@dataclass(frozen=True)
class Transaction:
    transaction_type: TransactionType
    client_id: int
    transaction_id: int
    amount: Optional[Amount] = None

    def __repr__(self) -> str:
        return f"Transaction({self.transaction_type.value}, client={self.client_id}, tx={self.transaction_id}, amount={self.amount})"


@dataclass
class ClientAccount:
    client_id: int
    available: Amount = field(default_factory=Amount.zero)
    held: Amount = field(default_factory=Amount.zero)
    locked: bool = False

    @property
    def total(self) -> Amount:
        return self.available + self.held

    def credit(self, amount: Amount) -> None:
        self.available += amount

    def debit(self, amount: Amount) -> None:
        self.available -= amount

    def hold(self, amount: Amount) -> None:
        self.available -= amount
        self.held += amount

    def release_hold(self, amount: Amount) -> None:
        self.held -= amount
        self.available += amount

    def charge_back(self, amount: Amount) -> None:
        self.held -= amount
        self.locked = True


class ProcessingStats:
    """Counters for tracking processing statistics."""

    def __init__(self):
        self.applied = 0
        self.ignored = 0
        self.skipped_rows = 0

    def record_result(self, result: ProcessingResult) -> None:
        if result == ProcessingResult.APPLIED:
            self.applied += 1
        else:
            self.ignored += 1

    def record_skipped_rows(self, count: int) -> None:
        self.skipped_rows += count

    def __repr__(self) -> str:
        return f"ProcessingStats(applied={self.applied}, ignored={self.ignored}, skipped_rows={self.skipped_rows})"
