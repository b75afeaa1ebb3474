"""Verification report value."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from verify.violations import VIOLATION_KINDS

if TYPE_CHECKING:
    from collections.abc import Iterable

    from verify.violations import Violation, ViolationKind


@dataclass(frozen=True)
class VerificationReport:
    violations: tuple[Violation, ...] = field(default_factory=tuple)
    counts: tuple[tuple[ViolationKind, int], ...] = field(default_factory=tuple)

    @classmethod
    def from_violations(cls, violations: Iterable[Violation]) -> VerificationReport:
        """Build a report from violations that are already in report order."""
        ordered = tuple(violations)
        tally = {kind: 0 for kind in VIOLATION_KINDS}
        for violation in ordered:
            tally[violation.kind] += 1
        return cls(
            violations=ordered,
            counts=tuple((kind, tally[kind]) for kind in VIOLATION_KINDS),
        )

    @property
    def conforms(self) -> bool:
        return not self.violations

    def count(self, kind: ViolationKind) -> int:
        return dict(self.counts).get(kind, 0)

    def to_dict(self) -> dict[str, object]:
        return {
            "conforms": self.conforms,
            "counts": dict(self.counts),
            "violations": [
                {**violation.model_dump(mode="json"), "message": violation.message}
                for violation in self.violations
            ],
        }


__all__ = ["VerificationReport"]
