import unittest
from datetime import date

from app.core.constants import BankType
from app.services.statement_parser import (
    StatementParseError,
    detect_bank_type,
    parse_date,
    parse_statement_text,
    parse_transaction_line,
)

HDFC_STATEMENT = """HDFC BANK LTD
Account No : 50100123456789
Name: RAHUL SHARMA
Statement From 01/03/2026 to 31/03/2026
Date Narration Withdrawal Amt Deposit Amt Closing Balance
Opening Balance 10,000.00
05/03/2026 UPI-GROCERY MART 1,250.00 8,750.00
10/03/2026 SALARY CREDIT ACME 50,000.00 58,750.00
15/03/2026 123456789 ATM WITHDRAWAL 2,000.00 56,750.00 Dr
Closing Balance 56,750.00
"""

ICICI_STATEMENT = """ICICI Bank Limited
Customer Name: PRIYA PATEL
Account Number: 001234567890
Transaction Date Particulars Withdrawal Amount Deposit Amount Balance
01/04/2026 NEFT RENT PAYMENT 15,000.00 - 35,000.00
03/04/2026 INTEREST CREDIT - 120.50 35,120.50
"""


class TestParseDate(unittest.TestCase):
    def test_supported_formats(self):
        self.assertEqual(parse_date("05/03/2026"), date(2026, 3, 5))
        self.assertEqual(parse_date("05-03-2026"), date(2026, 3, 5))
        self.assertEqual(parse_date("2026-03-05"), date(2026, 3, 5))

    def test_unknown_format(self):
        with self.assertRaises(StatementParseError):
            parse_date("March 5, 2026")


class TestDetectBank(unittest.TestCase):
    def test_by_name(self):
        self.assertEqual(detect_bank_type(HDFC_STATEMENT), BankType.HDFC)
        self.assertEqual(detect_bank_type(ICICI_STATEMENT), BankType.ICICI)

    def test_unknown(self):
        self.assertEqual(detect_bank_type("Some Other Bank\nStatement"), BankType.UNKNOWN)


class TestParseStatement(unittest.TestCase):
    def test_hdfc_two_column_rows(self):
        parsed = parse_statement_text(HDFC_STATEMENT)

        self.assertEqual(parsed.bank_type, BankType.HDFC)
        self.assertEqual(parsed.account_number, "50100123456789")
        self.assertEqual(parsed.account_holder_name, "RAHUL SHARMA")
        self.assertEqual((parsed.start_date, parsed.end_date), (date(2026, 3, 1), date(2026, 3, 31)))
        self.assertEqual(
            [(t.description, t.amount, t.type) for t in parsed.transactions],
            [
                ("UPI-GROCERY MART", 1250.0, "debit"),
                ("SALARY CREDIT ACME", 50000.0, "credit"),
                ("ATM WITHDRAWAL", 2000.0, "debit"),
            ],
        )
        self.assertEqual(parsed.transactions[2].reference, "123456789")
        self.assertEqual(parsed.closing_balance, 56750.0)

    def test_icici_withdrawal_deposit_columns(self):
        parsed = parse_statement_text(ICICI_STATEMENT)

        self.assertEqual(parsed.account_holder_name, "PRIYA PATEL")
        self.assertEqual(parsed.account_number, "001234567890")
        # No period header: inferred from the dates present
        self.assertEqual((parsed.start_date, parsed.end_date), (date(2026, 4, 1), date(2026, 4, 3)))
        self.assertEqual(
            [(t.amount, t.type) for t in parsed.transactions],
            [(15000.0, "debit"), (120.5, "credit")],
        )

    def test_unsupported_bank(self):
        with self.assertRaises(StatementParseError):
            parse_statement_text("Some Other Bank\n05/03/2026 COFFEE 100.00 900.00")

    def test_no_transactions(self):
        with self.assertRaises(StatementParseError):
            parse_statement_text("HDFC BANK LTD\nAccount No : 50100123456789\nNothing here")


class TestParseTransactionLine(unittest.TestCase):
    def test_cr_marker_wins(self):
        transaction = parse_transaction_line("02/03/2026 REFUND 500.00 1,500.00 Cr", previous_balance=None)

        self.assertEqual(transaction.type, "credit")

    def test_defaults_to_debit_without_context(self):
        transaction = parse_transaction_line("02/03/2026 SHOP 500.00 1,500.00", previous_balance=None)

        self.assertEqual(transaction.type, "debit")

    def test_non_transaction_line(self):
        self.assertIsNone(parse_transaction_line("Page 1 of 3", previous_balance=None))


if __name__ == "__main__":
    unittest.main()
