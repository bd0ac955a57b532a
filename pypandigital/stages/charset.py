"""Rejects values containing characters that are not digits of the base."""
from typing import Optional

from ..core.base_stage import BaseStage


class CharsetStage(BaseStage):
    """Matches the whole value against the compiled character-class pattern.

    Hex digits are matched case-insensitively.
    """

    name = "Charset"
    description = "Checks that every character is a valid digit for the base."

    def check(self, value: str) -> Optional[str]:
        if self.digits.pattern.fullmatch(value):
            return None
        invalid = sorted({char for char in value.upper() if char not in self.digits.alphabet})
        if invalid:
            return f"invalid digits for this base: {', '.join(repr(char) for char in invalid)}"
        return "length does not match the digit pattern"
