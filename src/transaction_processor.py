import logging
from dataclasses import replace
from typing import Dict

from models import Transaction, TransactionType, ClientAccount, ProcessingResult
from transaction_log import TransactionLog

logger = logging.getLogger(__name__)


class PaymentProcessor:
    """
    Applies transactions to client accounts.
    Owns the account map and the transaction log for the lifetime of a run.

    Business-rule failures (insufficient funds, unknown transaction ids) are
    never raised. They leave the ledger untouched and are reported through
    the returned ProcessingResult.
    """

    def __init__(self):
        self._accounts: Dict[int, ClientAccount] = {}
        self._log = TransactionLog()

    def get_account(self, client_id: int) -> ClientAccount:
        """Get existing account or create an empty one."""
        if client_id not in self._accounts:
            self._accounts[client_id] = ClientAccount(client_id=client_id)
        return self._accounts[client_id]

    def snapshot_accounts(self) -> Dict[int, ClientAccount]:
        """Return copies of all accounts, ordered by client id."""
        return {client_id: replace(self._accounts[client_id]) for client_id in sorted(self._accounts)}

    def apply(self, transaction: Transaction) -> ProcessingResult:
        """
        Apply a single transaction.

        The account is looked up by the client id on this record, and created
        if missing, before any transaction log lookup. Locked accounts still
        accept transactions.

        Returns:
            APPLIED: Ledger updated
            INSUFFICIENT_FUNDS: Withdrawal exceeded available funds, nothing changed
            UNKNOWN_TRANSACTION: Referenced transaction was never logged, nothing changed
        """
        account = self.get_account(transaction.client_id)

        match transaction.transaction_type:
            case TransactionType.DEPOSIT:
                return self._handle_deposit(account, transaction)
            case TransactionType.WITHDRAWAL:
                return self._handle_withdrawal(account, transaction)
            case TransactionType.DISPUTE:
                return self._handle_dispute(account, transaction)
            case TransactionType.RESOLVE:
                return self._handle_resolve(account, transaction)
            case TransactionType.CHARGEBACK:
                return self._handle_chargeback(account, transaction)

        raise ValueError(f"Unsupported transaction type: {transaction.transaction_type}")

    def _handle_deposit(self, account: ClientAccount, transaction: Transaction) -> ProcessingResult:
        account.credit(transaction.amount)
        self._log.store(transaction.transaction_id, transaction.amount)
        return ProcessingResult.APPLIED

    def _handle_withdrawal(self, account: ClientAccount, transaction: Transaction) -> ProcessingResult:
        if account.available < transaction.amount:
            logger.info(f"Withdrawal tx {transaction.transaction_id}: insufficient funds (available {account.available}, requested {transaction.amount})")
            return ProcessingResult.INSUFFICIENT_FUNDS

        account.debit(transaction.amount)
        # Logged negative so disputing a withdrawal reverses it with the same formula as a deposit
        self._log.store(transaction.transaction_id, -transaction.amount)
        return ProcessingResult.APPLIED

    def _handle_dispute(self, account: ClientAccount, transaction: Transaction) -> ProcessingResult:
        logged_amount = self._log.find(transaction.transaction_id)
        if logged_amount is None:
            logger.info(f"Dispute for tx {transaction.transaction_id}: transaction not found, ignoring")
            return ProcessingResult.UNKNOWN_TRANSACTION

        account.hold(logged_amount)
        return ProcessingResult.APPLIED

    def _handle_resolve(self, account: ClientAccount, transaction: Transaction) -> ProcessingResult:
        logged_amount = self._log.find(transaction.transaction_id)
        if logged_amount is None:
            logger.info(f"Resolve for tx {transaction.transaction_id}: transaction not found, ignoring")
            return ProcessingResult.UNKNOWN_TRANSACTION

        account.release_hold(logged_amount)
        return ProcessingResult.APPLIED

    def _handle_chargeback(self, account: ClientAccount, transaction: Transaction) -> ProcessingResult:
        logged_amount = self._log.find(transaction.transaction_id)
        if logged_amount is None:
            logger.info(f"Chargeback for tx {transaction.transaction_id}: transaction not found, ignoring")
            return ProcessingResult.UNKNOWN_TRANSACTION

        account.charge_back(logged_amount)
        return ProcessingResult.APPLIED
