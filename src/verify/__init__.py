"""Layering conformance analysis and reports.

The entry point lives in :mod:`verify.verify` (``from verify.verify import
verify``).
"""

from verify.report import VerificationReport
from verify.violations import (
    CycleViolation,
    ForbiddenExternalViolation,
    LayerDirectionViolation,
    Violation,
)

__all__ = [
    "CycleViolation",
    "ForbiddenExternalViolation",
    "LayerDirectionViolation",
    "VerificationReport",
    "Violation",
]
