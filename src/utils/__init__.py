"""Utility modules."""

from src.utils.logging import setup_logging
from src.utils.money import Money, parse_decimal, try_parse_decimal

__all__ = ["setup_logging", "Money", "parse_decimal", "try_parse_decimal"]
