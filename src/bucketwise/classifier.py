"""Assignment of transactions to buckets by prioritized rules."""

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field, fields

from bucketwise.models import Bucket, CategorizedTransaction, Rule, Transaction
from bucketwise.rules import evaluate_rule

logger = logging.getLogger(__name__)

RuleLookup = Mapping[str, Rule] | Callable[[str], Rule | None]


@dataclass
class ClassificationResult:
    """Transactions partitioned into buckets and the uncategorized rest."""

    by_bucket: dict[str, list[CategorizedTransaction]] = field(default_factory=dict)
    uncategorized: list[Transaction] = field(default_factory=list)

    @property
    def total(self) -> int:
        """Number of transactions across all buckets and uncategorized."""
        return sum(len(txs) for txs in self.by_bucket.values()) + len(self.uncategorized)


def sort_buckets(buckets: Iterable[Bucket]) -> list[Bucket]:
    """Sort buckets by ascending priority, keeping input order on ties."""
    return sorted(buckets, key=lambda b: b.priority)


def _resolver(rule_by_id: RuleLookup) -> Callable[[str], Rule | None]:
    if isinstance(rule_by_id, Mapping):
        return rule_by_id.get
    return rule_by_id


def find_bucket(
    transaction: Transaction,
    sorted_buckets: list[Bucket],
    rule_by_id: RuleLookup,
) -> Bucket | None:
    """
    Find the first bucket with an active rule matching the transaction.

    Buckets are scanned in the given order and each bucket's rules in their
    stored order; the first match wins.

    Args:
        transaction: Transaction to place
        sorted_buckets: Buckets already sorted by priority
        rule_by_id: Mapping or callable resolving rule ids

    Returns:
        The matching bucket, or None if no active rule matches
    """
    resolve = _resolver(rule_by_id)
    for bucket in sorted_buckets:
        for rule_id in bucket.active_rule_ids:
            rule = resolve(rule_id)
            if rule is None:
                logger.debug("Bucket %s references unknown rule %s", bucket.id, rule_id)
                continue
            if evaluate_rule(transaction, rule):
                return bucket
    return None


def categorize(transaction: Transaction, bucket: Bucket) -> CategorizedTransaction:
    """Tag a transaction with a bucket's id and name."""
    data = {f.name: getattr(transaction, f.name) for f in fields(Transaction)}
    return CategorizedTransaction(**data, bucket_id=bucket.id, bucket_name=bucket.name)


def classify_transactions(
    transactions: Iterable[Transaction],
    buckets: Iterable[Bucket],
    rule_by_id: RuleLookup,
) -> ClassificationResult:
    """
    Assign each transaction to at most one bucket.

    Every transaction ends up in exactly one output list: the bucket of the
    first matching active rule (buckets by ascending priority, rules in
    stored order), or ``uncategorized``. Input order is preserved within
    each list.

    Args:
        transactions: Transactions to classify
        buckets: Bucket configuration, in any order
        rule_by_id: Mapping or callable resolving rule ids

    Returns:
        ClassificationResult with an entry for every bucket id
    """
    sorted_buckets = sort_buckets(buckets)
    result = ClassificationResult(by_bucket={b.id: [] for b in sorted_buckets})

    for tx in transactions:
        bucket = find_bucket(tx, sorted_buckets, rule_by_id)
        if bucket is None:
            result.uncategorized.append(tx)
        else:
            result.by_bucket[bucket.id].append(categorize(tx, bucket))

    logger.debug(
        "Classified %d transactions, %d uncategorized",
        result.total,
        len(result.uncategorized),
    )
    return result
