"""Data models for transactions, rules, buckets and goals."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any


class FilterField(str, Enum):
    """Transaction fields a condition can test."""

    PAYEE_NAME = "payeeName"
    DESCRIPTION_TEXT = "descriptionText"
    ORG_NAME = "orgName"
    ACCOUNT_NAME = "accountName"
    AMOUNT_TRANSACTED = "amountTransacted"
    BALANCE_BEFORE = "balanceBefore"
    BALANCE_AFTER = "balanceAfter"
    DAY_OF_WEEK = "dayOfWeek"
    WEEK_OF_MONTH = "weekOfMonth"
    MONTH_OF_YEAR = "monthOfYear"
    TRANSACTION_TIME = "transactionTime"
    POSTED_DATE = "postedDate"


class StringOperator(str, Enum):
    EXACT_MATCH = "exactMatch"
    CONTAINS = "contains"
    DOES_NOT_CONTAIN = "doesNotContain"
    STARTS_WITH = "startsWith"
    ENDS_WITH = "endsWith"
    REGEX = "regex"


class NumericOperator(str, Enum):
    EQUAL_TO = "equalTo"
    NOT_EQUAL_TO = "notEqualTo"
    GREATER_THAN = "greaterThan"
    LESS_THAN = "lessThan"
    GREATER_THAN_OR_EQUAL_TO = "greaterThanOrEqualTo"
    LESS_THAN_OR_EQUAL_TO = "lessThanOrEqualTo"
    BETWEEN = "between"


class DateOperator(str, Enum):
    ON_DATE = "onDate"
    BEFORE_DATE = "beforeDate"
    AFTER_DATE = "afterDate"
    BETWEEN_DATES = "betweenDates"


class LogicalOperator(str, Enum):
    AND = "AND"
    OR = "OR"


class GoalType(str, Enum):
    SAVINGS = "savings"
    SPENDING_LIMIT = "spending_limit"


class GoalPeriodType(str, Enum):
    FIXED_DATE_RANGE = "fixed_date_range"
    ROLLING_DAYS = "rolling_days"
    CURRENT_MONTH = "current_month"
    CURRENT_YEAR = "current_year"
    ALL_TIME = "all_time"


@dataclass(frozen=True)
class Transaction:
    """A processed transaction from a SimpleFIN account."""

    id: str
    posted: int  # seconds since epoch
    amount: Decimal
    description: str
    account_id: str = ""
    org_name: str = ""
    account_name: str = ""
    currency: str = "USD"
    payee: str | None = None
    memo: str | None = None
    transacted_at: int | None = None
    balance_before: Decimal | None = None
    balance_after: Decimal | None = None

    @property
    def posted_at(self) -> datetime:
        """Posted time as a naive local datetime."""
        return datetime.fromtimestamp(self.posted)

    @property
    def is_expense(self) -> bool:
        """Return True if this is an expense (negative amount)."""
        return self.amount < 0

    @property
    def is_income(self) -> bool:
        """Return True if this is income (positive amount)."""
        return self.amount > 0

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for CSV output."""
        return {
            "id": self.id,
            "date": self.posted_at.date().isoformat(),
            "description": self.description,
            "payee": self.payee or "",
            "amount": str(self.amount),
            "account": self.account_name,
            "org": self.org_name,
            "currency": self.currency,
        }


@dataclass(frozen=True)
class CategorizedTransaction(Transaction):
    """A transaction tagged with the bucket it was classified into."""

    bucket_id: str | None = None
    bucket_name: str | None = None

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for CSV output, including the bucket."""
        data = super().to_dict()
        data["bucket"] = self.bucket_name or ""
        return data


@dataclass
class FilterCondition:
    """A single leaf predicate: field, operator and comparison value(s)."""

    id: str
    field: str
    operator: str
    value: Any = None
    value2: Any = None
    name: str | None = None
    use_absolute_amount: bool = False


@dataclass
class FilterGroup:
    """A node combining conditions and nested groups with AND/OR."""

    id: str
    operator: str = LogicalOperator.AND.value
    conditions: list[FilterCondition] = field(default_factory=list)
    sub_groups: list["FilterGroup"] = field(default_factory=list)
    name: str | None = None


@dataclass
class Rule:
    """A named, reusable predicate shared between buckets."""

    id: str
    name: str
    filter_group: FilterGroup | None


@dataclass
class BucketRule:
    """Association of a rule with a bucket."""

    rule_id: str
    is_active: bool = True


@dataclass
class Goal:
    """A savings target or spending limit attached to a bucket."""

    is_active: bool
    goal_type: str
    target_amount: Decimal | None
    period_type: str
    rolling_days: int | None = None
    start_date: str | None = None  # YYYY-MM-DD, for fixed_date_range
    end_date: str | None = None  # YYYY-MM-DD, for fixed_date_range


@dataclass
class Bucket:
    """A budget category with a priority and an ordered set of rules."""

    id: str
    name: str
    priority: float
    rules: list[BucketRule] = field(default_factory=list)
    goal: Goal | None = None

    @property
    def active_rule_ids(self) -> list[str]:
        """Ids of the active rule associations, in stored order."""
        return [link.rule_id for link in self.rules if link.is_active]


@dataclass
class Account:
    """An account as reported by SimpleFIN."""

    id: str
    name: str
    org_name: str
    currency: str
    balance: Decimal
    available_balance: Decimal | None = None
    balance_date: int | None = None
    org_domain: str | None = None


def _new_id() -> str:
    return str(uuid.uuid4())


def new_filter_condition() -> FilterCondition:
    """Create an empty condition with the default field and operator."""
    return FilterCondition(
        id=_new_id(),
        field=FilterField.PAYEE_NAME.value,
        operator=StringOperator.CONTAINS.value,
        value="",
    )


def new_filter_group(operator: str = LogicalOperator.AND.value) -> FilterGroup:
    """Create an empty filter group."""
    return FilterGroup(id=_new_id(), operator=operator)


def new_rule(name: str, operator: str = LogicalOperator.AND.value) -> Rule:
    """Create a rule with an empty top-level filter group."""
    return Rule(id=_new_id(), name=name, filter_group=new_filter_group(operator))
