"""Rule engine: field extraction, conditions, filter groups and rules."""

from bucketwise.rules.conditions import evaluate_condition
from bucketwise.rules.fields import extract_value, week_of_month
from bucketwise.rules.groups import evaluate_filter_group, evaluate_rule

__all__ = [
    "evaluate_condition",
    "evaluate_filter_group",
    "evaluate_rule",
    "extract_value",
    "week_of_month",
]
