"""Produces candidate digit strings for bulk checking.

The validator itself only ever sees strings. The helpers here enumerate a
range of digit strings in a given base, and read candidates line by line
from a text stream.
"""

import logging
from typing import IO, Iterator

from ..core.digits import HEX_DIGITS

logger = logging.getLogger(__name__)


def to_digits(number: int, base: int, width: int = 0) -> str:
    """Formats a non-negative integer as a digit string in `base`.

    Args:
        number (int): The value to format.
        base (int): The base, 2 through 16.
        width (int): Minimum width; the result is padded with leading zeros.

    Returns:
        str: The digit string, upper-case for hex.

    Raises:
        ValueError: If `number` is negative or `base` is out of range.
    """
    if not 2 <= base <= 16:
        raise ValueError(f"Cannot enumerate digit strings in base {base}")
    if number < 0:
        raise ValueError(f"Cannot format negative number {number}")
    digits = []
    while number:
        number, remainder = divmod(number, base)
        digits.append(HEX_DIGITS[remainder])
    return "".join(reversed(digits)).rjust(max(width, 1), "0")


def iter_digit_strings(start: str, stop: str, base: int = 10) -> Iterator[str]:
    """Returns an iterator over every digit string from `start` to `stop` inclusive.

    The strings keep the width of `start`, so a leading zero in `start` is
    preserved for the whole range. The bounds are checked before the
    iterator is returned.

    Args:
        start (str): The first digit string.
        stop (str): The last digit string.
        base (int): The base both bounds are written in, 2 through 16.

    Returns:
        Iterator[str]: The digit strings in increasing order.

    Raises:
        ValueError: If a bound is not made only of digits of `base`, or the
            base cannot be enumerated.
    """
    if not 2 <= base <= 16:
        raise ValueError(f"Cannot enumerate digit strings in base {base}")
    valid = HEX_DIGITS[:base]
    for bound in (start, stop):
        # int() would also accept signs, whitespace and underscores.
        if not bound or any(char not in valid for char in bound.upper()):
            raise ValueError(f"Range bounds must be base-{base} digit strings, got {bound!r}")
    first = int(start, base)
    last = int(stop, base)

    logger.info(f"Enumerating {max(last - first + 1, 0)} base-{base} digit strings from {start} to {stop}")
    return (to_digits(number, base, len(start)) for number in range(first, last + 1))


def read_candidates(stream: IO[str]) -> Iterator[str]:
    """Yields one candidate per non-blank line, with surrounding whitespace removed."""
    for line in stream:
        candidate = line.strip()
        if candidate:
            yield candidate
