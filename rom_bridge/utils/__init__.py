"""Small shared helpers for the ROM bridge."""

from .result import Err, Ok, Result, capture, error_message, is_err, is_ok, unwrap, unwrap_or

__all__ = [
    "Ok",
    "Err",
    "Result",
    "capture",
    "error_message",
    "is_err",
    "is_ok",
    "unwrap",
    "unwrap_or",
]
