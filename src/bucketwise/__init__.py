"""bucketwise - Rule-based bucketing of SimpleFIN transactions with goal tracking."""

from bucketwise.classifier import ClassificationResult, classify_transactions
from bucketwise.goals import GoalProgress, compute_goal_progress
from bucketwise.importer import TransactionImporter
from bucketwise.logging_setup import configure_logging
from bucketwise.models import Bucket, Goal, Rule, Transaction
from bucketwise.rules import evaluate_condition, evaluate_filter_group, evaluate_rule
from bucketwise.simplefin import SimpleFinClient
from bucketwise.summary import BucketSummary, summarize_buckets

__version__ = "0.1.0"
__all__ = [
    "Bucket",
    "BucketSummary",
    "ClassificationResult",
    "Goal",
    "GoalProgress",
    "Rule",
    "SimpleFinClient",
    "Transaction",
    "TransactionImporter",
    "classify_transactions",
    "compute_goal_progress",
    "configure_logging",
    "evaluate_condition",
    "evaluate_filter_group",
    "evaluate_rule",
    "summarize_buckets",
]
