"""Tests for bucket summaries."""

from collections.abc import Callable
from datetime import datetime
from decimal import Decimal

from bucketwise.models import Bucket, FilterCondition, Goal, Rule, Transaction
from bucketwise.summary import UNCATEGORIZED_ID, UNCATEGORIZED_NAME, summarize_buckets

MakeTx = Callable[..., Transaction]
MakeCond = Callable[..., FilterCondition]

NOW = datetime(2024, 3, 10, 15, 0)


class TestSummarizeBuckets:
    """Tests for summarize_buckets function."""

    def test_totals_and_order(
        self,
        make_transaction: MakeTx,
        make_condition: MakeCond,
        make_rule: Callable[..., Rule],
        make_bucket: Callable[..., Bucket],
    ) -> None:
        """Test buckets come back by priority with signed totals."""
        coffee = make_rule("coffee", [make_condition("payeeName", "contains", "coffee")])
        salary = make_rule("salary", [make_condition("amountTransacted", "greaterThan", 1000)])
        buckets = [
            make_bucket("income", 2, ["salary"]),
            make_bucket("treats", 1, ["coffee"]),
        ]
        txs = [
            make_transaction(payee="Coffee House", amount="-4.50"),
            make_transaction(payee="Coffee Cart", amount="-3.25"),
            make_transaction(payee="Employer", amount="2500"),
            make_transaction(payee="Hardware Store", amount="-80", currency="CAD"),
        ]

        summaries = summarize_buckets(txs, buckets, {"coffee": coffee, "salary": salary}, NOW)

        assert [s.bucket_id for s in summaries] == ["treats", "income", UNCATEGORIZED_ID]
        assert summaries[0].total_amount == Decimal("-7.75")
        assert summaries[1].total_amount == Decimal("2500")
        assert summaries[2].name == UNCATEGORIZED_NAME
        assert summaries[2].is_uncategorized is True
        assert summaries[2].currency == "CAD"

    def test_no_uncategorized_entry_when_all_placed(
        self,
        make_transaction: MakeTx,
        make_rule: Callable[..., Rule],
        make_bucket: Callable[..., Bucket],
    ) -> None:
        """Test the pseudo-bucket only appears when needed."""
        catch_all = make_rule("all", [])
        summaries = summarize_buckets(
            [make_transaction()], [make_bucket("everything", 1, ["all"])], {"all": catch_all}, NOW
        )
        assert [s.bucket_id for s in summaries] == ["everything"]

    def test_empty_bucket_defaults(self, make_bucket: Callable[..., Bucket]) -> None:
        """Test an empty bucket totals zero in USD."""
        [summary] = summarize_buckets([], [make_bucket("empty", 1, [])], {}, NOW)
        assert summary.total_amount == Decimal("0")
        assert summary.currency == "USD"
        assert summary.goal_progress.is_configured is False

    def test_goal_progress_uses_bucket_transactions(
        self,
        make_transaction: MakeTx,
        make_condition: MakeCond,
        make_rule: Callable[..., Rule],
        make_bucket: Callable[..., Bucket],
    ) -> None:
        """Test goals only see their own bucket's transactions."""
        dining = make_rule("dining", [make_condition("payeeName", "contains", "restaurant")])
        goal = Goal(
            is_active=True,
            goal_type="spending_limit",
            target_amount=Decimal("200"),
            period_type="current_month",
        )
        bucket = make_bucket("dining", 1, ["dining"], goal=goal)
        txs = [
            make_transaction(payee="Restaurant A", amount="-120", posted_at=datetime(2024, 3, 3, 19, 0)),
            make_transaction(payee="Grocer", amount="-300", posted_at=datetime(2024, 3, 4, 10, 0)),
        ]

        summaries = summarize_buckets(txs, [bucket], {"dining": dining}, NOW)
        progress = summaries[0].goal_progress

        assert progress.is_configured is True
        assert progress.relevant_amount == Decimal("120")
        assert progress.remaining == Decimal("80")
        assert progress.is_met_or_on_track is True
