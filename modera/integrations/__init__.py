"""Integration check helpers."""

from .checks import (
    IntegrationCheckResult,
    check_fallback_model,
    check_model,
    check_primary_model,
    run_all_checks,
)

__all__ = [
    "IntegrationCheckResult",
    "check_fallback_model",
    "check_model",
    "check_primary_model",
    "run_all_checks",
]
