"""Clamping of single two-digit mask segments."""

from __future__ import annotations

from datepick_textual.models import Segment


def validate(raw_digits: str, segment: Segment) -> str:
    """Clamp a fully typed two-digit segment into its valid range.

    Partial segments are returned unchanged so nothing is clamped while the
    user is still typing.  Callers are expected to pass digits only; anything
    else is returned verbatim.

    Args:
        raw_digits: One or two digit characters.
        segment: The segment kind, which determines the closed range.

    Returns:
        A two-digit string within the segment's range, or *raw_digits*
        unchanged when it is not exactly two ASCII digits.
    """
    if len(raw_digits) != 2 or not (raw_digits.isascii() and raw_digits.isdigit()):
        return raw_digits
    low, high = segment.bounds
    return f"{min(max(int(raw_digits), low), high):02d}"
