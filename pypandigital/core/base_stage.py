"""
Base stage class that every pandigital check inherits from.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, Optional

from .digits import DigitSet


class BaseStage(ABC):
    """Abstract base class for the stages of the pandigital pipeline.

    A stage inspects a candidate string against a `DigitSet` and either
    passes it or returns the reason it was rejected. Stages keep no per-call
    state, so one instance can be shared by concurrent callers.

    Attributes:
        name (str): The display name of the stage.
        description (str): A brief explanation of what the stage checks.
    """

    name: str = "UnnamedStage"
    description: str = "No description provided"

    def __init__(self, digits: DigitSet) -> None:
        """Initializes the stage with the derived rule data.

        Args:
            digits (DigitSet): The alphabet, minimum length and pattern to
                check against.
        """
        self.digits = digits

    @abstractmethod
    def check(self, value: str) -> Optional[str]:
        """Checks a candidate string.

        Args:
            value (str): The candidate.

        Returns:
            Optional[str]: None if the value passes, otherwise the reason it
            was rejected.
        """
        raise NotImplementedError("Subclasses must implement check()")

    def passes(self, value: str) -> bool:
        return self.check(value) is None

    def result(self, value: str) -> Dict[str, Any]:
        """Runs the stage and returns its outcome in a standardized dictionary.

        Args:
            value (str): The candidate.

        Returns:
            Dict[str, Any]: The stage's name, description, whether it passed,
            and the rejection reason (None on success).
        """
        reason = self.check(value)
        return {
            "name": self.name,
            "description": self.description,
            "passed": reason is None,
            "reason": reason,
        }
