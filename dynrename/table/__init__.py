"""
Remote table access: client construction, scanning and conditional writes.
"""
from .client import make_client
from .scanner import fetch_all
from .writer import ConditionBuilder, apply_writes, put_conditional

__all__ = [
    "make_client",
    "fetch_all",
    "ConditionBuilder",
    "apply_writes",
    "put_conditional",
]
