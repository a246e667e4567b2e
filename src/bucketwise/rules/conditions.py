"""Evaluation of a single filter condition against a transaction.

Conditions never raise. A bad regex, an unparsable number or date, a
missing transaction value or a field/operator pair of mismatched types all
evaluate to False, so one malformed rule cannot abort classification of a
whole transaction set.
"""

import logging
import re
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any

from bucketwise.models import (
    DateOperator,
    FilterCondition,
    NumericOperator,
    StringOperator,
    Transaction,
)
from bucketwise.rules.fields import extract_value
from bucketwise.utils import parse_amount, parse_date

logger = logging.getLogger(__name__)

STRING_OPERATORS = frozenset(op.value for op in StringOperator)
NUMERIC_OPERATORS = frozenset(op.value for op in NumericOperator)
DATE_OPERATORS = frozenset(op.value for op in DateOperator)


def evaluate_condition(transaction: Transaction, condition: FilterCondition) -> bool:
    """
    Check whether a transaction satisfies one condition.

    Args:
        transaction: Transaction to test
        condition: Condition with field, operator and value(s)

    Returns:
        True if the condition holds, False otherwise (including on any error)
    """
    if transaction is None or condition is None or not condition.field or not condition.operator:
        logger.warning("Invalid arguments for condition evaluation: %r", condition)
        return False

    try:
        return _evaluate(transaction, condition)
    except Exception:
        logger.exception("Error evaluating condition %s", condition.id)
        return False


def _evaluate(transaction: Transaction, condition: FilterCondition) -> bool:
    operator = _as_str(condition.operator)
    tx_value = extract_value(transaction, _as_str(condition.field))

    if tx_value is None:
        # Only an explicit null comparison can match a missing value.
        return operator == NumericOperator.EQUAL_TO and condition.value is None

    if operator in STRING_OPERATORS:
        if not isinstance(tx_value, str):
            return _mismatch(condition, tx_value)
        return _evaluate_string(tx_value, operator, condition.value)

    if operator in NUMERIC_OPERATORS:
        if not _is_number(tx_value):
            return _mismatch(condition, tx_value)
        number = Decimal(tx_value)
        if condition.use_absolute_amount:
            number = abs(number)
        return _evaluate_numeric(number, operator, condition.value, condition.value2)

    if operator in DATE_OPERATORS:
        if not isinstance(tx_value, date):
            return _mismatch(condition, tx_value)
        return _evaluate_date(parse_date(tx_value), operator, condition.value, condition.value2)

    logger.warning("Unknown operator: %s", operator)
    return False


def _as_str(value: Any) -> str:
    return value.value if isinstance(value, Enum) else str(value)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, Decimal)) and not isinstance(value, bool)


def _mismatch(condition: FilterCondition, tx_value: Any) -> bool:
    logger.debug(
        "Operator %s does not apply to field %s (%s value)",
        condition.operator,
        condition.field,
        type(tx_value).__name__,
    )
    return False


def _evaluate_string(tx_value: str, operator: str, filter_value: Any) -> bool:
    pattern = "" if filter_value is None else str(filter_value)

    if operator == StringOperator.REGEX:
        try:
            return re.search(pattern, tx_value) is not None
        except re.error:
            logger.warning("Invalid regex pattern: %s", pattern)
            return False

    haystack = tx_value.lower()
    needle = pattern.lower()

    if operator == StringOperator.EXACT_MATCH:
        return haystack == needle
    if operator == StringOperator.CONTAINS:
        return needle in haystack
    if operator == StringOperator.DOES_NOT_CONTAIN:
        return needle not in haystack
    if operator == StringOperator.STARTS_WITH:
        return haystack.startswith(needle)
    if operator == StringOperator.ENDS_WITH:
        return haystack.endswith(needle)
    return False


def _evaluate_numeric(number: Decimal, operator: str, value: Any, value2: Any) -> bool:
    bound = parse_amount(value)
    if bound is None:
        logger.warning("Filter value is not a number: %r", value)
        return False

    if operator == NumericOperator.EQUAL_TO:
        return number == bound
    if operator == NumericOperator.NOT_EQUAL_TO:
        return number != bound
    if operator == NumericOperator.GREATER_THAN:
        return number > bound
    if operator == NumericOperator.LESS_THAN:
        return number < bound
    if operator == NumericOperator.GREATER_THAN_OR_EQUAL_TO:
        return number >= bound
    if operator == NumericOperator.LESS_THAN_OR_EQUAL_TO:
        return number <= bound
    if operator == NumericOperator.BETWEEN:
        upper = parse_amount(value2)
        if upper is None:
            logger.warning("Second value for 'between' is missing or not a number: %r", value2)
            return False
        return bound <= number <= upper
    return False


def _evaluate_date(tx_day: date | None, operator: str, value: Any, value2: Any) -> bool:
    if tx_day is None:
        return False

    first = parse_date(value)
    if first is None:
        logger.warning("Invalid filter date: %r", value)
        return False

    if operator == DateOperator.ON_DATE:
        return tx_day == first
    if operator == DateOperator.BEFORE_DATE:
        return tx_day < first
    if operator == DateOperator.AFTER_DATE:
        return tx_day > first
    if operator == DateOperator.BETWEEN_DATES:
        second = parse_date(value2)
        if second is None:
            logger.warning("Invalid date range: %r - %r", value, value2)
            return False
        return first <= tx_day <= second
    return False
