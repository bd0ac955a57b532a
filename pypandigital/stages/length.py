"""Rejects values whose length cannot hold every required digit.

This is the cheapest stage and runs first, so that values of the wrong
length are rejected in constant time.
"""
from typing import Optional

from ..core.base_stage import BaseStage


class LengthStage(BaseStage):
    """Checks the value against the minimum (or, for unique digits, exact) length."""

    name = "Length"
    description = "Checks that the value is long enough to contain every digit."

    def check(self, value: str) -> Optional[str]:
        required = self.digits.min_length
        if len(value) < required:
            return f"too short: {len(value)} characters, at least {required} required"
        if self.digits.unique and len(value) != required:
            return f"wrong length: {len(value)} characters, exactly {required} required for unique digits"
        return None
