"""
Datetime utilities.

Provides timezone-aware datetime functions.
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """
    Get current UTC datetime with timezone info.

    Returns:
        Current datetime in UTC with timezone awareness
    """
    return datetime.now(UTC)


def epoch_millis(moment: datetime | None = None) -> int:
    """
    Milliseconds since the Unix epoch.

    Args:
        moment: Datetime to convert (defaults to now)

    Returns:
        Integer milliseconds, used for generated payout/transaction ids
    """
    moment = moment or utc_now()
    return int(moment.timestamp() * 1000)
