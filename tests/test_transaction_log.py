import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from amount import Amount
from transaction_log import TransactionLog


class TestTransactionLog:
    def test_find_missing(self):
        log = TransactionLog()
        assert log.find(1) is None
        assert 1 not in log
        assert len(log) == 0

    def test_store_keeps_sign(self):
        log = TransactionLog()
        log.store(1, Amount.from_whole(10))
        log.store(2, -Amount.from_whole(3))
        assert log.find(1) == Amount.from_whole(10)
        assert log.find(2) == Amount.from_whole(-3)
        assert 2 in log
        assert len(log) == 2

    def test_store_overwrites(self):
        log = TransactionLog()
        log.store(1, Amount.from_whole(10))
        log.store(1, Amount.from_whole(20))
        assert log.find(1) == Amount.from_whole(20)
        assert len(log) == 1
