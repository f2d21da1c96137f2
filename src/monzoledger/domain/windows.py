"""Date windowing for paginated API requests."""

from datetime import datetime, timedelta

from monzoledger.domain.errors import ValidationError


def windows(start: datetime, end: datetime, max_span_days: int) -> list[tuple[datetime, datetime]]:
    """Split ``[start, end]`` into contiguous ``(since, before)`` windows.

    Each window spans ``max_span_days`` except the last one, which covers
    whatever remains up to ``end`` and is never split further. Windows share
    their boundaries, so the result has no gaps and no overlaps.

    Args:
        start: Beginning of the interval
        end: End of the interval
        max_span_days: Maximum length of one window in days

    Returns:
        Ordered list of (since, before) pairs. ``start == end`` yields a single
        zero-length window.

    Raises:
        ValidationError: If max_span_days is not positive or start is after end
    """
    if max_span_days <= 0:
        raise ValidationError(f"Window size must be positive, got {max_span_days}")
    if start > end:
        raise ValidationError(f"Window start {start.isoformat()} is after end {end.isoformat()}")

    if start == end:
        return [(start, end)]

    span = timedelta(days=max_span_days)
    result = []
    since = start
    while since + span < end:
        result.append((since, since + span))
        since += span
    result.append((since, end))
    return result
