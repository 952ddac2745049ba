"""Interface for violation reporting."""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from prefer_arrow.domain.entities import CheckSummary, FixSummary


class ViolationReporter(Protocol):
    """Protocol for reporting check and fix results."""

    def report_check(self, summary: "CheckSummary") -> None:
        """Report violations found by a check run."""
        ...

    def report_fix(self, summary: "FixSummary") -> None:
        """Report what a fix run changed and what remains."""
        ...
