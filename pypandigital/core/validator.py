"""Handles the pandigital validation pipeline.

A `Validator` is built once from a rule set. On construction it derives the
digit alphabet, the minimum length and the pre-filter pattern, and
instantiates the pipeline stages. Each value is then passed through:

1.  The length gate.
2.  The character-class gate (the compiled pattern).
3.  The digit coverage count.

The pipeline stops at the first stage that rejects the value.
"""

import logging
from typing import Any, Dict, Iterable, Iterator, List, Optional, Pattern, Tuple

from .base_stage import BaseStage
from .config import Config
from .digits import DigitSet
from ..stages import DEFAULT_STAGES

# Initialize a logger for this module.
logger = logging.getLogger(__name__)


class Validator:
    """Detects pandigital digit strings for one rule set.

    Values must be passed as strings. A number with a significant leading
    zero, or a hex value written as an integer, has already lost information
    before it reaches the validator, so non-string input is never converted
    and is simply reported as not pandigital.

    All derived state is computed in the constructor and never modified,
    so a single instance can be used from several threads.
    """

    def __init__(self, base: int = 10, unique: bool = False, require_zero: bool = True) -> None:
        """Initializes the validator.

        Args:
            base (int): The numbering base, 1 through 10 or 16.
            unique (bool): If True, digits may not repeat.
            require_zero (bool): If True, the zero digit must appear. If
                False, zero is not a valid digit (for bases up to 10).

        Raises:
            ConfigError: If `base` is not supported.
        """
        self._config = Config(base=base, unique=unique, require_zero=require_zero)
        self._digits = DigitSet.from_config(self._config)
        self._stages: Tuple[BaseStage, ...] = tuple(stage(self._digits) for stage in DEFAULT_STAGES)
        logger.debug(
            f"Validator built for {self._config.describe()}: alphabet={''.join(self._digits.alphabet)!r}, "
            f"min_length={self._digits.min_length}, pattern={self._digits.pattern.pattern!r}"
        )

    @classmethod
    def from_config(cls, config: Config) -> "Validator":
        """Builds a validator from an existing rule set."""
        return cls(base=config.base, unique=config.unique, require_zero=config.require_zero)

    @property
    def config(self) -> Config:
        return self._config

    @property
    def alphabet(self) -> Tuple[str, ...]:
        return self._digits.alphabet

    @property
    def min_length(self) -> int:
        return self._digits.min_length

    @property
    def pattern(self) -> Pattern[str]:
        return self._digits.pattern

    def is_pandigital(self, value: str) -> bool:
        """Tests whether a digit string is pandigital under this rule set.

        Args:
            value (str): The digit string. Hex digits are case-insensitive.

        Returns:
            bool: True if the value holds every required digit and satisfies
            the length and uniqueness rules. Never raises.
        """
        if not isinstance(value, str):
            logger.debug(f"Rejecting non-string value of type {type(value).__name__}")
            return False
        for stage in self._stages:
            if not stage.passes(value):
                return False
        return True

    def explain(self, value: str) -> Dict[str, Any]:
        """Runs the pipeline and reports what each stage decided.

        Args:
            value (str): The digit string.

        Returns:
            Dict[str, Any]: The value, the verdict, the name of the stage that
            rejected it (None if it is pandigital), the rejection reason, and
            the individual results of every stage that ran.
        """
        if not isinstance(value, str):
            reason = f"expected a string of digits, got {type(value).__name__}"
            return {
                "value": value,
                "pandigital": False,
                "failed_stage": "Input",
                "reason": reason,
                "stages": [],
            }

        stage_results: List[Dict[str, Any]] = []
        failed: Optional[Dict[str, Any]] = None
        for stage in self._stages:
            result = stage.result(value)
            stage_results.append(result)
            if not result["passed"]:
                failed = result
                logger.debug(f"{value!r} rejected by {stage.name}: {result['reason']}")
                break

        return {
            "value": value,
            "pandigital": failed is None,
            "failed_stage": failed["name"] if failed else None,
            "reason": failed["reason"] if failed else None,
            "stages": stage_results,
        }

    def scan(self, values: Iterable[str]) -> Iterator[str]:
        """Lazily yields the pandigital values from an iterable.

        Args:
            values (Iterable[str]): Candidate digit strings.

        Yields:
            str: Each candidate that is pandigital, in input order.
        """
        for value in values:
            if self.is_pandigital(value):
                yield value

    def __repr__(self) -> str:
        return (
            f"Validator(base={self._config.base}, unique={self._config.unique}, "
            f"require_zero={self._config.require_zero})"
        )
