from __future__ import annotations


def percent(part: int, whole: int) -> int:
    """100 * part / whole rounded half-up to an int; 0 when whole is 0.

    Integer arithmetic keeps .5 cases exact (Python's round() is banker's rounding).
    """
    if whole <= 0:
        return 0
    return (200 * part + whole) // (2 * whole)


def mean_rounded(values) -> int:
    values = list(values)
    if not values:
        return 0
    return (2 * sum(values) + len(values)) // (2 * len(values))
