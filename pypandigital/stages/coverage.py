"""Counts individual digits to confirm every required digit is present.

This is the final, linear-time stage. By the time it runs the value is known
to contain only valid digits and to have an acceptable length.
"""
from typing import Dict, Optional

from ..core.base_stage import BaseStage


class CoverageStage(BaseStage):
    """Tallies digit occurrences, enforcing uniqueness when configured."""

    name = "Coverage"
    description = "Checks that every digit of the base appears (exactly once for unique digits)."

    def check(self, value: str) -> Optional[str]:
        counts: Dict[str, int] = {}
        for digit in value.upper():
            counts[digit] = counts.get(digit, 0) + 1
            if self.digits.unique and counts[digit] > 1:
                return f"repeated digit {digit!r}"

        if len(counts) != self.digits.min_length:
            missing = [digit for digit in self.digits.alphabet if digit not in counts]
            if missing:
                return f"missing digits: {', '.join(missing)}"
            return f"{len(counts)} distinct digits, {self.digits.min_length} required"
        return None
