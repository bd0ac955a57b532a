"""The stages of the pandigital pipeline.

Each module in this package holds one `BaseStage` subclass. `DEFAULT_STAGES`
lists them in the order the validator runs them: cheapest first, so that
most non-pandigital values are rejected before the digit count.
"""
from .charset import CharsetStage
from .coverage import CoverageStage
from .length import LengthStage

DEFAULT_STAGES = (LengthStage, CharsetStage, CoverageStage)

__all__ = ["CharsetStage", "CoverageStage", "LengthStage", "DEFAULT_STAGES"]
