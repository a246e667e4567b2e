"""Goal progress for savings targets and spending limits.

A goal's window is resolved from its period type relative to ``now`` (local
time), the bucket's transactions posted inside the window are summed, and
the sum is read according to the goal type:

- savings: the signed sum counts, so net withdrawals count against it.
- spending limit: only net outflow counts; net refunds count as zero.

The calculator feeds a display layer and never raises. An inactive goal
reports ``is_configured=False``; a goal whose period cannot be resolved
reports zero progress and is not on track.
"""

import calendar
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, time, timedelta
from decimal import Decimal

from bucketwise.models import Goal, GoalPeriodType, GoalType, Transaction
from bucketwise.utils import parse_amount, parse_date

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
HUNDRED = Decimal("100")


@dataclass(frozen=True)
class GoalWindow:
    """Inclusive local-time bounds of a goal period."""

    start: datetime
    end: datetime

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end


@dataclass(frozen=True)
class GoalProgress:
    """Progress of a bucket towards its goal."""

    is_configured: bool
    is_valid_period: bool = False
    goal_type: str | None = None
    target_amount: Decimal = ZERO
    current_sum: Decimal = ZERO
    relevant_amount: Decimal = ZERO
    remaining: Decimal = ZERO
    is_met_or_on_track: bool = False
    progress_percentage: Decimal = ZERO
    transaction_count: int = 0
    window: GoalWindow | None = None
    period_label: str = ""


def _start_of_day(moment: datetime) -> datetime:
    return datetime.combine(moment.date(), time.min)


def _end_of_day(moment: datetime) -> datetime:
    return datetime.combine(moment.date(), time.max)


def _rolling_days(goal: Goal) -> int | None:
    days = goal.rolling_days
    if isinstance(days, bool) or not isinstance(days, int) or days <= 0:
        return None
    return days


def resolve_goal_window(goal: Goal, now: datetime | None = None) -> GoalWindow | None:
    """
    Resolve the date window a goal's period covers.

    Args:
        goal: Goal with a period type and its period fields
        now: Reference time (local, naive); defaults to the system clock

    Returns:
        GoalWindow with full-day bounds, or None if the period is invalid
    """
    today = now or datetime.now()
    period = goal.period_type

    if period == GoalPeriodType.CURRENT_MONTH:
        last_day = calendar.monthrange(today.year, today.month)[1]
        return GoalWindow(
            start=datetime(today.year, today.month, 1),
            end=_end_of_day(datetime(today.year, today.month, last_day)),
        )

    if period == GoalPeriodType.ROLLING_DAYS:
        days = _rolling_days(goal)
        if days is None:
            logger.warning("Invalid rolling day count: %r", goal.rolling_days)
            return None
        try:
            start = today - timedelta(days=days - 1)
        except OverflowError:
            logger.warning("Rolling day count reaches before year 1: %r", days)
            return None
        return GoalWindow(start=_start_of_day(start), end=_end_of_day(today))

    if period == GoalPeriodType.FIXED_DATE_RANGE:
        start = parse_date(goal.start_date)
        end = parse_date(goal.end_date)
        if start is None or end is None:
            logger.warning("Invalid fixed date range: %r - %r", goal.start_date, goal.end_date)
            return None
        return GoalWindow(
            start=datetime.combine(start, time.min),
            end=datetime.combine(end, time.max),
        )

    if period == GoalPeriodType.CURRENT_YEAR:
        return GoalWindow(
            start=datetime(today.year, 1, 1),
            end=_end_of_day(datetime(today.year, 12, 31)),
        )

    if period == GoalPeriodType.ALL_TIME:
        return GoalWindow(start=datetime.min, end=datetime.max)

    logger.warning("Unknown goal period type: %r", period)
    return None


def describe_goal_period(
    goal: Goal,
    window: GoalWindow | None,
    now: datetime | None = None,
) -> str:
    """Plain-text label for a goal period, e.g. "Last 30 Days"."""
    if window is None:
        return "Invalid Period"

    today = now or datetime.now()
    period = goal.period_type

    if period == GoalPeriodType.CURRENT_MONTH:
        return f"This Month ({today.strftime('%B %Y')})"
    if period == GoalPeriodType.ROLLING_DAYS:
        return f"Last {goal.rolling_days} Days"
    if period == GoalPeriodType.FIXED_DATE_RANGE:
        return f"{window.start.strftime('%b %d, %Y')} - {window.end.strftime('%b %d, %Y')}"
    if period == GoalPeriodType.CURRENT_YEAR:
        return f"This Year ({today.year})"
    if period == GoalPeriodType.ALL_TIME:
        return "All Time"
    return "N/A"


def _posted_within(tx: Transaction, window: GoalWindow) -> bool:
    try:
        return window.contains(tx.posted_at)
    except (TypeError, ValueError, OverflowError, OSError):
        logger.warning("Transaction %s has an invalid posted time: %r", tx.id, tx.posted)
        return False


def _relevant_amount(goal_type: str, current_sum: Decimal) -> Decimal:
    if goal_type == GoalType.SAVINGS:
        return current_sum
    return max(ZERO, -current_sum)


def _is_met_or_on_track(goal_type: str, relevant: Decimal, target: Decimal) -> bool:
    if goal_type == GoalType.SAVINGS:
        return relevant >= target
    return relevant <= target


def _progress_percentage(goal_type: str, relevant: Decimal, target: Decimal) -> Decimal:
    if target > ZERO:
        return relevant / target * HUNDRED
    # Zero target: met when nothing is owed against it.
    if goal_type == GoalType.SAVINGS:
        return HUNDRED if relevant >= ZERO else ZERO
    return HUNDRED if relevant == ZERO else ZERO


def compute_goal_progress(
    goal: Goal | None,
    transactions: Iterable[Transaction],
    now: datetime | None = None,
) -> GoalProgress:
    """
    Compute a bucket's progress towards its goal.

    Args:
        goal: The bucket's goal, if any
        transactions: Transactions already assigned to the bucket
        now: Reference time (local, naive); defaults to the system clock

    Returns:
        GoalProgress; ``is_configured`` is False for a missing or inactive
        goal, ``is_valid_period`` is False when the window cannot be resolved
    """
    if goal is None or not goal.is_active or goal.target_amount is None:
        return GoalProgress(is_configured=False)

    target = parse_amount(goal.target_amount)
    if target is None:
        logger.warning("Goal target is not a number: %r", goal.target_amount)
        return GoalProgress(is_configured=False)

    now = now or datetime.now()
    goal_type = goal.goal_type
    if goal_type not in (GoalType.SAVINGS, GoalType.SPENDING_LIMIT):
        logger.warning("Unknown goal type %r, treating as spending limit", goal_type)

    window = resolve_goal_window(goal, now)
    label = describe_goal_period(goal, window, now)

    if window is None:
        return GoalProgress(
            is_configured=True,
            is_valid_period=False,
            goal_type=goal_type,
            target_amount=target,
            remaining=target,
            period_label=label,
        )

    in_period = [tx for tx in transactions if _posted_within(tx, window)]
    current_sum = sum((tx.amount for tx in in_period), ZERO)
    relevant = _relevant_amount(goal_type, current_sum)

    return GoalProgress(
        is_configured=True,
        is_valid_period=True,
        goal_type=goal_type,
        target_amount=target,
        current_sum=current_sum,
        relevant_amount=relevant,
        remaining=max(ZERO, target - relevant),
        is_met_or_on_track=_is_met_or_on_track(goal_type, relevant, target),
        progress_percentage=_progress_percentage(goal_type, relevant, target),
        transaction_count=len(in_period),
        window=window,
        period_label=label,
    )
