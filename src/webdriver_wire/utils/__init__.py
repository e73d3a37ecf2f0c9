"""Shared utilities for the WebDriver wire client."""

from .error_mapper import ErrorCode, ErrorReport, describe_error, map_error, map_status
from .guardrails import extract_domain, validate_domain

__all__ = [
    "ErrorCode",
    "ErrorReport",
    "describe_error",
    "map_error",
    "map_status",
    "extract_domain",
    "validate_domain",
]
