"""Field-value extraction for rule conditions.

Every field a condition can test maps to a typed value taken from the
transaction: strings for text fields, ``Decimal`` for money, ``int`` for
the derived date parts and ``datetime.date`` for the posted day. Date parts
are computed from the posted timestamp in the local time zone.
"""

import logging
import math
from datetime import date, datetime
from typing import Any

from bucketwise.models import FilterField, Transaction

logger = logging.getLogger(__name__)


def day_of_week(moment: datetime) -> int:
    """Day of week with Sunday as 0 and Saturday as 6."""
    return (moment.weekday() + 1) % 7


def week_of_month(moment: datetime | date) -> int:
    """Week of the month, counting Sunday-started weeks from the 1st.

    ``ceil((day + weekday_of_first) / 7)`` with Sunday as weekday 0, so the
    1st is always week 1 and a new week begins on each Sunday.
    """
    first = date(moment.year, moment.month, 1)
    first_weekday = (first.weekday() + 1) % 7
    return math.ceil((moment.day + first_weekday) / 7)


def extract_value(transaction: Transaction, field: str) -> Any:
    """
    Return the value of ``field`` for a transaction.

    Args:
        transaction: Transaction to read
        field: One of the FilterField values

    Returns:
        str, Decimal, int or date depending on the field; None when the
        transaction has no value for it or the field is unknown
    """
    if field == FilterField.PAYEE_NAME:
        return transaction.payee
    if field == FilterField.DESCRIPTION_TEXT:
        return transaction.description
    if field == FilterField.ORG_NAME:
        return transaction.org_name
    if field == FilterField.ACCOUNT_NAME:
        return transaction.account_name
    if field == FilterField.AMOUNT_TRANSACTED:
        return transaction.amount
    if field == FilterField.BALANCE_BEFORE:
        return transaction.balance_before
    if field == FilterField.BALANCE_AFTER:
        return transaction.balance_after

    posted_at = transaction.posted_at

    if field == FilterField.DAY_OF_WEEK:
        return day_of_week(posted_at)
    if field == FilterField.WEEK_OF_MONTH:
        return week_of_month(posted_at)
    if field == FilterField.MONTH_OF_YEAR:
        return posted_at.month - 1
    if field == FilterField.TRANSACTION_TIME:
        return f"{posted_at.hour:02d}:{posted_at.minute:02d}"
    if field == FilterField.POSTED_DATE:
        return posted_at.date()

    logger.warning("Unknown transaction field requested: %s", field)
    return None
