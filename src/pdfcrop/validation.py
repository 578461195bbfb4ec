from __future__ import annotations


def is_valid_range(start: int, end: int, total_pages: int) -> bool:
    """True when [start, end] (1-indexed, inclusive) fits a total_pages document."""
    return total_pages > 0 and start >= 1 and end >= start and end <= total_pages
