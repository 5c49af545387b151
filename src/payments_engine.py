import logging
from typing import Dict, Iterable

from models import Transaction, ClientAccount, ProcessingStats
from transaction_processor import PaymentProcessor
from transaction_reader import TransactionReader

logger = logging.getLogger(__name__)


class PaymentsEngine:
    """
    Feeds transactions from CSV input through a PaymentProcessor, one at a time,
    and returns the final account states.
    """

    def __init__(self, strict: bool = False):
        self._strict = strict
        self._processor = PaymentProcessor()
        self.stats = ProcessingStats()

    def process_file(self, filepath: str) -> Dict[int, ClientAccount]:
        """Process CSV file and return final account states."""
        with TransactionReader.from_path(filepath, strict=self._strict) as reader:
            return self._process_reader(reader)

    def process_stream(self, stream) -> Dict[int, ClientAccount]:
        """Process CSV text stream and return final account states."""
        return self._process_reader(TransactionReader(stream, strict=self._strict))

    def _process_reader(self, reader: TransactionReader) -> Dict[int, ClientAccount]:
        # Strict mode rejects the whole input before any transaction is applied
        transactions = reader.read_all() if self._strict else reader
        accounts = self.process_transactions(transactions)

        self.stats.record_skipped_rows(reader.skipped_rows)
        return accounts

    def process_transactions(self, transactions: Iterable[Transaction]) -> Dict[int, ClientAccount]:
        logger.info("Starting processing")
        for transaction in transactions:
            result = self._processor.apply(transaction)
            self.stats.record_result(result)
        logger.info(f"Processing complete: {self.stats.applied} applied, {self.stats.ignored} ignored")
        return self._processor.snapshot_accounts()
