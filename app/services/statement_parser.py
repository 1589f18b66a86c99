"""
Bank statement parsing.

Extracts text from uploaded PDF statements with pdfplumber and turns HDFC/ICICI
style statement text into structured transactions.
"""
import io
import logging
import re
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

import pdfplumber

from app.core.constants import BankType, TransactionType
from app.core.handler import AppException

logger = logging.getLogger(__name__)

DATE_TOKEN = r"\d{1,2}[/\-]\d{1,2}[/\-]\d{4}"
AMOUNT_TOKEN = r"\d{1,3}(?:,\d{2,3})*(?:\.\d{2})|\d+\.\d{2}"

PERIOD_RE = re.compile(rf"({DATE_TOKEN})\s+to\s+({DATE_TOKEN})", re.IGNORECASE)
ACCOUNT_NUMBER_RE = re.compile(
    r"(?:account\s+number|account\s+no\.?|a/c\s+no\.?)\s*[:\-]?\s*([0-9X]{6,})",
    re.IGNORECASE,
)
LINE_DATE_RE = re.compile(rf"^({DATE_TOKEN})\s+(.*)$")
TRAILING_AMOUNTS_RE = re.compile(rf"((?:\s+(?:{AMOUNT_TOKEN}|-))+)\s*(Cr|Dr)?\s*$", re.IGNORECASE)
ANY_DATE_RE = re.compile(DATE_TOKEN)


class StatementParseError(AppException):
    """The uploaded document could not be read as a supported bank statement."""

    def __init__(self, message: str):
        super().__init__(message=message, status_code=400)


@dataclass
class ParsedTransaction:
    date: date
    description: str
    amount: float
    type: str
    balance: Optional[float] = None
    reference: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "description": self.description,
            "amount": self.amount,
            "type": self.type,
            "balance": self.balance,
            "reference": self.reference,
        }


@dataclass
class ParsedStatement:
    bank_type: BankType
    account_number: str
    account_holder_name: str
    start_date: date
    end_date: date
    transactions: list[ParsedTransaction] = field(default_factory=list)

    @property
    def closing_balance(self) -> Optional[float]:
        for transaction in reversed(self.transactions):
            if transaction.balance is not None:
                return transaction.balance
        return None


def extract_pdf_text(content: bytes) -> str:
    """Extract text from every page of a PDF."""
    text_parts = []
    try:
        with pdfplumber.open(io.BytesIO(content)) as pdf:
            for page in pdf.pages:
                page_text = page.extract_text() or ""
                if page_text:
                    text_parts.append(page_text)
    except Exception as e:
        logger.warning(f"[Parser] Could not read PDF: {e}")
        raise StatementParseError("Could not read the uploaded PDF") from e

    return "\n".join(text_parts)


def detect_bank_type(text: str) -> BankType:
    """Identify the issuing bank from statement text."""
    lowered = text.lower()

    if "hdfc bank" in lowered or "hdfc statement" in lowered:
        return BankType.HDFC
    if "icici bank" in lowered or "icici statement" in lowered:
        return BankType.ICICI

    # Fall back on column header wording
    if "date" in lowered and "narration" in lowered and "withdrawal amt" in lowered:
        return BankType.HDFC
    if "transaction date" in lowered and "withdrawal amount" in lowered:
        return BankType.ICICI

    return BankType.UNKNOWN


def parse_date(value: str) -> date:
    """Parse dd/mm/yyyy, dd-mm-yyyy or yyyy-mm-dd."""
    value = value.strip()
    for fmt in ("%d/%m/%Y", "%d-%m-%Y", "%Y-%m-%d", "%Y/%m/%d"):
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            continue
    raise StatementParseError(f"Unrecognized date format: {value}")


def _to_amount(token: str) -> Optional[float]:
    if token == "-":
        return None
    return float(token.replace(",", ""))


def _find_account_number(lines: list[str]) -> str:
    for line in lines[:50]:
        match = ACCOUNT_NUMBER_RE.search(line)
        if match:
            return match.group(1).strip()
    return ""


def _find_holder_name(lines: list[str], bank_type: BankType) -> str:
    for index, line in enumerate(lines[:50]):
        lowered = line.lower()
        if "name" not in lowered or "branch name" in lowered:
            continue
        if bank_type == BankType.ICICI and not ("customer" in lowered or "account holder" in lowered):
            continue
        # "Name: John Doe" on one line, otherwise the next line holds the value
        _, _, inline = line.partition(":")
        if inline.strip():
            return inline.strip()
        if index + 1 < len(lines):
            return lines[index + 1].strip()
    return ""


def _find_period(lines: list[str], text: str) -> tuple[Optional[date], Optional[date]]:
    for line in lines[:50]:
        lowered = line.lower()
        if "period" in lowered or "statement from" in lowered:
            match = PERIOD_RE.search(line)
            if match:
                return parse_date(match.group(1)), parse_date(match.group(2))

    # No header; use the earliest and latest dates that appear
    dates = []
    for token in ANY_DATE_RE.findall(text[:10000]):
        try:
            dates.append(parse_date(token))
        except StatementParseError:
            continue
    if len(dates) >= 2:
        return min(dates), max(dates)
    return None, None


def _is_header(line: str) -> bool:
    lowered = line.lower()
    return (
        "date" in lowered
        and ("description" in lowered or "narration" in lowered or "particulars" in lowered)
        and ("withdrawal" in lowered or "debit" in lowered)
    )


def parse_transaction_line(line: str, previous_balance: Optional[float]) -> Optional[ParsedTransaction]:
    """
    Parse one statement row.

    Accepted shapes (amounts may use thousands separators):
      <date> <description> <amount> <balance> [Cr|Dr]
      <date> <description> <withdrawal|-> <deposit|-> <balance>

    With two amounts the direction comes from a Cr/Dr marker, else from the change
    in running balance, else it defaults to debit.
    """
    match = LINE_DATE_RE.match(line.strip())
    if not match:
        return None
    date_token, rest = match.groups()

    amounts_match = TRAILING_AMOUNTS_RE.search(rest)
    if not amounts_match:
        return None
    description = rest[:amounts_match.start()].strip()
    tokens = amounts_match.group(1).split()
    marker = (amounts_match.group(2) or "").lower()
    if not description or len(tokens) < 2:
        return None

    try:
        tx_date = parse_date(date_token)
    except StatementParseError:
        return None

    values = [_to_amount(token) for token in tokens[-3:]]
    balance = values[-1]

    if len(values) == 3:
        withdrawal, deposit = values[0], values[1]
        if withdrawal:
            amount, tx_type = withdrawal, TransactionType.DEBIT
        elif deposit:
            amount, tx_type = deposit, TransactionType.CREDIT
        else:
            return None
    else:
        amount = values[0]
        if amount is None:
            return None
        if marker == "cr":
            tx_type = TransactionType.CREDIT
        elif marker == "dr":
            tx_type = TransactionType.DEBIT
        elif previous_balance is not None and balance is not None:
            tx_type = (
                TransactionType.CREDIT
                if round(balance - previous_balance, 2) == round(amount, 2)
                else TransactionType.DEBIT
            )
        else:
            tx_type = TransactionType.DEBIT

    # A leading reference number (cheque / UPI ref) is split off the narration
    reference = None
    ref_match = re.match(r"^(\d{6,})\s+(.+)$", description)
    if ref_match:
        reference, description = ref_match.groups()

    return ParsedTransaction(
        date=tx_date,
        description=description,
        amount=round(amount, 2),
        type=tx_type.value,
        balance=balance,
        reference=reference,
    )


def parse_statement_text(text: str) -> ParsedStatement:
    """Parse statement text from a supported bank into a ParsedStatement."""
    bank_type = detect_bank_type(text)
    if bank_type == BankType.UNKNOWN:
        raise StatementParseError("Unsupported bank statement format. Only HDFC and ICICI are supported")

    lines = [line.strip() for line in text.splitlines()]
    account_number = _find_account_number(lines)
    holder_name = _find_holder_name(lines, bank_type)
    start_date, end_date = _find_period(lines, text)

    start_index = next((i + 1 for i, line in enumerate(lines) if _is_header(line)), 0)

    transactions: list[ParsedTransaction] = []
    previous_balance: Optional[float] = None
    for line in lines[start_index:]:
        lowered = line.lower()
        if not line:
            continue
        if "opening balance" in lowered:
            # Seed the running balance so the first row's direction can be inferred
            trailing = re.findall(AMOUNT_TOKEN, line)
            if trailing:
                previous_balance = float(trailing[-1].replace(",", ""))
            continue
        if "closing balance" in lowered:
            continue

        transaction = parse_transaction_line(line, previous_balance)
        if transaction:
            transactions.append(transaction)
            if transaction.balance is not None:
                previous_balance = transaction.balance

    if not transactions:
        raise StatementParseError("No transactions found in the statement")

    if start_date is None or end_date is None:
        start_date = min(t.date for t in transactions)
        end_date = max(t.date for t in transactions)

    logger.info(
        f"[Parser] Parsed {bank_type} statement: {len(transactions)} transactions "
        f"{start_date.isoformat()} to {end_date.isoformat()}"
    )

    return ParsedStatement(
        bank_type=bank_type,
        account_number=account_number,
        account_holder_name=holder_name,
        start_date=start_date,
        end_date=end_date,
        transactions=transactions,
    )


def parse_statement_pdf(content: bytes) -> ParsedStatement:
    """Extract text from a PDF statement and parse it."""
    text = extract_pdf_text(content)
    if not text.strip():
        raise StatementParseError("The uploaded PDF contains no extractable text")
    return parse_statement_text(text)
