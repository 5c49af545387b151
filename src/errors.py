from typing import Dict, Optional


class PaymentsError(Exception):
    """Base exception for the payments engine"""

    pass


class InputSourceError(PaymentsError):
    """Transaction input could not be opened or read"""

    pass


class TransactionParseError(PaymentsError):
    """A CSV row could not be decoded into a Transaction"""

    def __init__(self, message: str, line_number: Optional[int] = None, row: Optional[Dict[str, str]] = None):
        self.line_number = line_number
        self.row = row
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class ReportWriteError(PaymentsError):
    """Account report could not be written"""

    pass
