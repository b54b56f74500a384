"""Integer math helpers."""


def abs_int(i: int) -> int:
    """Return the absolute value of an integer."""
    return -i if i < 0 else i