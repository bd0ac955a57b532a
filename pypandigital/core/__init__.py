"""Core components for pypandigital.

This package contains the rule set and settings, the derivation of the digit
alphabet and pattern, the base class for pipeline stages, and the `Validator`
that runs them.
"""
