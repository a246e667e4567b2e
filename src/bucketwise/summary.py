"""Per-bucket totals and goal progress for a classification pass."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from bucketwise.classifier import RuleLookup, classify_transactions, sort_buckets
from bucketwise.goals import GoalProgress, compute_goal_progress
from bucketwise.models import Bucket, Transaction

UNCATEGORIZED_ID = "uncategorized"
UNCATEGORIZED_NAME = "Uncategorized Transactions"
UNCATEGORIZED_PRIORITY = 9999
DEFAULT_CURRENCY = "USD"


@dataclass
class BucketSummary:
    """A bucket with its transactions, total and goal progress."""

    bucket_id: str
    name: str
    priority: float
    transactions: list[Transaction] = field(default_factory=list)
    goal_progress: GoalProgress = field(
        default_factory=lambda: GoalProgress(is_configured=False)
    )

    @property
    def total_amount(self) -> Decimal:
        """Signed sum of all transaction amounts in the bucket."""
        return sum((tx.amount for tx in self.transactions), Decimal("0"))

    @property
    def currency(self) -> str:
        """Currency of the first transaction, or USD for an empty bucket."""
        if self.transactions and self.transactions[0].currency:
            return self.transactions[0].currency
        return DEFAULT_CURRENCY

    @property
    def is_uncategorized(self) -> bool:
        return self.bucket_id == UNCATEGORIZED_ID


def summarize_buckets(
    transactions: Iterable[Transaction],
    buckets: Iterable[Bucket],
    rule_by_id: RuleLookup,
    now: datetime | None = None,
) -> list[BucketSummary]:
    """
    Classify transactions and summarize each bucket.

    Buckets come back in priority order, followed by an "uncategorized"
    pseudo-bucket when any transaction matched no bucket.

    Args:
        transactions: Transactions to classify
        buckets: Bucket configuration
        rule_by_id: Mapping or callable resolving rule ids
        now: Reference time for goal windows

    Returns:
        List of BucketSummary
    """
    transactions = list(transactions)
    sorted_buckets = sort_buckets(buckets)
    result = classify_transactions(transactions, sorted_buckets, rule_by_id)

    summaries: list[BucketSummary] = []
    for bucket in sorted_buckets:
        bucket_txs = result.by_bucket.get(bucket.id, [])
        summaries.append(
            BucketSummary(
                bucket_id=bucket.id,
                name=bucket.name,
                priority=bucket.priority,
                transactions=list(bucket_txs),
                goal_progress=compute_goal_progress(bucket.goal, bucket_txs, now),
            )
        )

    if result.uncategorized:
        summaries.append(
            BucketSummary(
                bucket_id=UNCATEGORIZED_ID,
                name=UNCATEGORIZED_NAME,
                priority=UNCATEGORIZED_PRIORITY,
                transactions=list(result.uncategorized),
            )
        )

    return summaries
