import csv
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, TextIO

from account import ClientAccount
from models import AMOUNT_CONTEXT

AMOUNT_PRECISION = Decimal("0.0001")
REPORT_HEADER = ["client", "available", "held", "total", "locked"]


def round_amount(value: Decimal) -> Decimal:
    """Round to 4 decimal places, halves away from zero."""
    return value.quantize(AMOUNT_PRECISION, rounding=ROUND_HALF_UP, context=AMOUNT_CONTEXT)


def format_amount(value: Decimal) -> str:
    """Format decimal with up to 4 decimal places, removing trailing zeros."""
    normalized = round_amount(value).normalize(AMOUNT_CONTEXT)
    if normalized.is_zero():
        # normalize() keeps the sign of a negative zero
        return "0"
    return f"{normalized:f}"


def write_report(accounts: Dict[int, ClientAccount], stream: TextIO) -> None:
    writer = csv.writer(stream, lineterminator="\n")
    writer.writerow(REPORT_HEADER)
    for client_id in sorted(accounts.keys()):
        account = accounts[client_id]
        writer.writerow([
            client_id,
            format_amount(account.available),
            format_amount(account.held),
            format_amount(account.total),
            str(account.locked).lower(),
        ])
