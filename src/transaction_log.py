from typing import Dict, Optional

from amount import Amount


class TransactionLog:
    """
    Append-only record of amounts applied by deposits and withdrawals,
    keyed by transaction id, for later dispute lookups.

    Amounts are signed: a deposit is stored positive and a withdrawal
    negative, so dispute, resolve and chargeback can apply one formula
    whichever kind of transaction they reference.
    """

    def __init__(self):
        self._amounts: Dict[int, Amount] = {}

    def store(self, transaction_id: int, signed_amount: Amount) -> None:
        self._amounts[transaction_id] = signed_amount

    def find(self, transaction_id: int) -> Optional[Amount]:
        return self._amounts.get(transaction_id)

    def __contains__(self, transaction_id: int) -> bool:
        return transaction_id in self._amounts

    def __len__(self) -> int:
        return len(self._amounts)
