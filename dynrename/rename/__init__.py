"""
Rename rules and the nested-item rewrite engine.
"""
from .rules import Replace, parse_replace, parse_replacements
from .rewrite import ReplaceResult, rewrite

__all__ = [
    "Replace",
    "parse_replace",
    "parse_replacements",
    "ReplaceResult",
    "rewrite",
]
