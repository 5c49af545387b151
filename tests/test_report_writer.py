import sys
import os
import io

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from amount import Amount
from errors import ReportWriteError
from models import ClientAccount
from report_writer import write_accounts


class BrokenStream(io.StringIO):
    def write(self, s):
        raise OSError("disk full")


class TestWriteAccounts:
    def test_writes_header_and_rows(self):
        accounts = {
            1: ClientAccount(1, available=Amount.from_decimal("1.5"), held=Amount.zero()),
            2: ClientAccount(2, available=Amount.from_decimal("-30"), held=Amount.from_whole(100), locked=True),
        }
        out = io.StringIO()

        write_accounts(accounts, out)

        assert out.getvalue().splitlines() == [
            "client,available,held,total,locked",
            "1,1.5000,0.0000,1.5000,false",
            "2,-30.0000,100.0000,70.0000,true",
        ]

    def test_no_accounts_writes_header_only(self):
        out = io.StringIO()

        write_accounts({}, out)

        assert out.getvalue() == "client,available,held,total,locked\n"

    def test_write_failure_raises(self):
        with pytest.raises(ReportWriteError):
            write_accounts({1: ClientAccount(1)}, BrokenStream())
