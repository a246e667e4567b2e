"""Recursive evaluation of filter groups and rules."""

import logging
from enum import Enum

from bucketwise.models import FilterGroup, LogicalOperator, Rule, Transaction
from bucketwise.rules.conditions import evaluate_condition

logger = logging.getLogger(__name__)


def _is_and(group: FilterGroup) -> bool:
    operator = group.operator.value if isinstance(group.operator, Enum) else str(group.operator)
    return operator.upper() == LogicalOperator.AND.value


def evaluate_filter_group(transaction: Transaction, group: FilterGroup | None) -> bool:
    """
    Evaluate a transaction against a filter group and its sub-groups.

    The group's conditions and sub-groups form one flat set combined with
    the group's operator. Conditions are checked first:

    - AND: a failing condition makes the group False without looking at
      sub-groups; otherwise every sub-group must also pass.
    - OR: a passing condition makes the group True without looking at
      sub-groups; otherwise at least one sub-group must pass.

    An empty condition list is vacuously True under AND and False under OR,
    so a group with no conditions and no sub-groups is True for AND and
    False for OR.

    Args:
        transaction: Transaction to test
        group: Group to evaluate

    Returns:
        True if the transaction matches the group
    """
    if group is None:
        logger.warning("Missing filter group")
        return False

    is_and = _is_and(group)
    conditions = group.conditions or []
    sub_groups = group.sub_groups or []

    if is_and:
        conditions_met = all(evaluate_condition(transaction, c) for c in conditions)
        if not conditions_met or not sub_groups:
            return conditions_met
        return all(evaluate_filter_group(transaction, g) for g in sub_groups)

    conditions_met = any(evaluate_condition(transaction, c) for c in conditions)
    if conditions_met or not sub_groups:
        return conditions_met
    return any(evaluate_filter_group(transaction, g) for g in sub_groups)


def evaluate_rule(transaction: Transaction, rule: Rule | None) -> bool:
    """Evaluate a transaction against a rule's top-level filter group."""
    if rule is None or rule.filter_group is None:
        logger.warning("Invalid rule or missing filter group: %r", getattr(rule, "id", None))
        return False
    return evaluate_filter_group(transaction, rule.filter_group)
