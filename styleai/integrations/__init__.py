"""Integration check helpers."""

from .checks import (
    IntegrationCheckResult,
    check_genai,
    run_all_checks,
)

__all__ = [
    "IntegrationCheckResult",
    "check_genai",
    "run_all_checks",
]
