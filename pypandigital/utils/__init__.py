"""Utility modules for pypandigital.

This package contains helpers for producing candidate digit strings: range
enumeration and reading candidates from files.
"""
