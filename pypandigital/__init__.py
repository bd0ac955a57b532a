"""pypandigital: Pandigital number detection.

This package tests whether a string of digits contains every digit of its
base (1 through 10, or 16), optionally without the zero digit and optionally
without repeated digits.
"""

from .core.config import Config, ConfigError
from .core.validator import Validator

__version__ = "0.1.0"
__author__ = "Livrädo Sandoval"
__license__ = "MIT"

__all__ = ["Config", "ConfigError", "Validator", "__version__", "__author__", "__license__"]
