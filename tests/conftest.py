"""Pytest configuration and fixtures."""

from collections.abc import Callable
from datetime import datetime
from decimal import Decimal
from typing import Any

import pytest

from bucketwise.models import (
    Bucket,
    BucketRule,
    FilterCondition,
    FilterGroup,
    Rule,
    Transaction,
)

# Timestamps are built from naive local datetimes so date parts and goal
# windows line up with the local time zone the engine uses.
DEFAULT_POSTED_AT = datetime(2024, 3, 10, 12, 0)


def local_ts(moment: datetime) -> int:
    """Epoch seconds for a naive local datetime."""
    return int(moment.timestamp())


@pytest.fixture
def make_transaction() -> Callable[..., Transaction]:
    """Factory for transactions with sensible defaults."""
    counter = iter(range(1, 1_000_000))

    def _make(
        amount: str | Decimal = "-10.00",
        description: str = "Test transaction",
        payee: str | None = None,
        posted_at: datetime = DEFAULT_POSTED_AT,
        **kwargs: Any,
    ) -> Transaction:
        kwargs.setdefault("id", f"tx-{next(counter)}")
        kwargs.setdefault("account_id", "acct-1")
        kwargs.setdefault("org_name", "Test Bank")
        kwargs.setdefault("account_name", "Checking")
        return Transaction(
            posted=local_ts(posted_at),
            amount=Decimal(amount),
            description=description,
            payee=payee,
            **kwargs,
        )

    return _make


@pytest.fixture
def make_condition() -> Callable[..., FilterCondition]:
    """Factory for filter conditions."""
    counter = iter(range(1, 1_000_000))

    def _make(
        field: str,
        operator: str,
        value: Any = None,
        value2: Any = None,
        use_absolute_amount: bool = False,
    ) -> FilterCondition:
        return FilterCondition(
            id=f"cond-{next(counter)}",
            field=field,
            operator=operator,
            value=value,
            value2=value2,
            use_absolute_amount=use_absolute_amount,
        )

    return _make


@pytest.fixture
def make_rule() -> Callable[..., Rule]:
    """Factory for a rule wrapping a single filter group."""

    def _make(
        rule_id: str,
        conditions: list[FilterCondition],
        operator: str = "AND",
        sub_groups: list[FilterGroup] | None = None,
    ) -> Rule:
        return Rule(
            id=rule_id,
            name=rule_id.title(),
            filter_group=FilterGroup(
                id=f"{rule_id}-group",
                operator=operator,
                conditions=conditions,
                sub_groups=sub_groups or [],
            ),
        )

    return _make


@pytest.fixture
def make_bucket() -> Callable[..., Bucket]:
    """Factory for buckets linking active rules by id."""

    def _make(
        bucket_id: str,
        priority: float,
        rule_ids: list[str],
        **kwargs: Any,
    ) -> Bucket:
        return Bucket(
            id=bucket_id,
            name=bucket_id.title(),
            priority=priority,
            rules=[BucketRule(rule_id=rid) for rid in rule_ids],
            **kwargs,
        )

    return _make


@pytest.fixture
def simplefin_payload() -> dict[str, Any]:
    """A raw /accounts payload with two accounts."""
    return {
        "errors": [],
        "accounts": [
            {
                "org": {"domain": "bank.example", "name": "Example Bank", "sfin-url": "", "url": "", "id": "org-1"},
                "id": "acct-1",
                "name": "Checking",
                "currency": "USD",
                "balance": "1000.00",
                "available-balance": "950.00",
                "balance-date": local_ts(datetime(2024, 3, 12, 9, 0)),
                "transactions": [
                    {
                        "id": "t1",
                        "posted": local_ts(datetime(2024, 3, 9, 12, 0)),
                        "amount": "-50.00",
                        "description": "GROCERY MART",
                        "payee": "Grocery Mart",
                    },
                    {
                        "id": "t2",
                        "posted": local_ts(datetime(2024, 3, 11, 12, 0)),
                        "amount": "200.00",
                        "description": "PAYROLL",
                    },
                    {
                        "id": "t3",
                        "posted": local_ts(datetime(2024, 3, 10, 12, 0)),
                        "amount": "-25.50",
                        "description": "COFFEE HOUSE",
                        "payee": "Coffee House",
                    },
                ],
                "holdings": [],
            },
            {
                "org": {"domain": "card.example", "name": "Card Co"},
                "id": "acct-2",
                "name": "Credit Card",
                "currency": "USD",
                "balance": "-300.00",
                "balance-date": local_ts(datetime(2024, 3, 12, 9, 0)),
                "transactions": [
                    {
                        "id": "c1",
                        "posted": local_ts(datetime(2024, 3, 10, 18, 30)),
                        "amount": "-100.00",
                        "description": "AMAZON MKTPLACE",
                        "payee": "Amazon",
                    },
                ],
                "holdings": [],
            },
        ],
    }
