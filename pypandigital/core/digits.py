"""Derives the digit alphabet, minimum length and pre-filter pattern.

Everything in this module is a pure function of a `Config`. The results are
bundled into a `DigitSet`, which a `Validator` builds once and never changes.
"""

import re
from dataclasses import dataclass
from typing import Pattern, Tuple

from .config import Config

HEX_DIGITS = tuple("0123456789ABCDEF")


def build_alphabet(config: Config) -> Tuple[str, ...]:
    """Returns the ordered digit characters that are valid for the rule set.

    For bases up to 10 the alphabet starts at "1" when zero is not required.
    Base 16 always uses 0-9 and A-F, whatever `require_zero` says.

    Args:
        config (Config): The rule set.

    Returns:
        Tuple[str, ...]: One single-character string per digit.
    """
    if config.base <= 10:
        start = 0 if config.require_zero else 1
        return tuple(str(digit) for digit in range(start, config.base))
    return HEX_DIGITS


def min_length(config: Config) -> int:
    """Returns the fewest characters a qualifying value can have."""
    return config.base - (0 if config.require_zero else 1)


def compile_pattern(alphabet: Tuple[str, ...], length: int, unique: bool) -> Pattern[str]:
    """Compiles the character-class pre-filter for an alphabet.

    The pattern accepts only alphabet characters (case-insensitively) and is
    meant to be applied with `fullmatch`. Its quantifier is `{length}` when
    digits must be unique and `{length,}` otherwise. It does not check that
    every digit is present.

    Args:
        alphabet (Tuple[str, ...]): The valid digit characters.
        length (int): The minimum length of a qualifying value.
        unique (bool): Whether the length must be exact.

    Returns:
        Pattern[str]: The compiled pattern.
    """
    if not alphabet:
        # An empty character class is not valid syntax; only "" can qualify.
        return re.compile("")
    quantifier = f"{{{length}}}" if unique else f"{{{length},}}"
    char_class = "".join(re.escape(char) for char in alphabet)
    return re.compile(f"[{char_class}]{quantifier}", re.IGNORECASE)


@dataclass(frozen=True)
class DigitSet:
    """The derived, read-only data a validator checks values against."""

    alphabet: Tuple[str, ...]
    min_length: int
    pattern: Pattern[str]
    unique: bool

    @classmethod
    def from_config(cls, config: Config) -> "DigitSet":
        alphabet = build_alphabet(config)
        length = min_length(config)
        return cls(
            alphabet=alphabet,
            min_length=length,
            pattern=compile_pattern(alphabet, length, config.unique),
            unique=config.unique,
        )
