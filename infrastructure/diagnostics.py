# ============================================================================
# DIAGNOSTIC SINK
# ============================================================================
# EPOCH: 1 - DDL GENERATION
# STATUS: Infrastructure - User-facing diagnostics
# PURPOSE: Report progress, naming problems and failures during generation
# CREATED: 19 OCT 2026
# ============================================================================
"""
Diagnostic Sink

Generators report through a DiagnosticSink instead of raising for
localized problems:

    info    -> progress narration ("Generate table DDL for X")
    warning -> non-fatal naming issues (invalid schema, unresolved FK)
    error   -> the current element or the whole run is aborted

LoggingDiagnosticSink collects every diagnostic in order and mirrors it to
the structured log, which is what the CLI and tests use. A host application
can subclass DiagnosticSink to route diagnostics to its own UI.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional

from core.contracts import Severity
from core.logging import get_logger, ComponentType

logger = get_logger(__name__, ComponentType.DIAGNOSTICS)


@dataclass
class Diagnostic:
    """One reported diagnostic."""
    severity: Severity
    message: str
    element: Optional[str] = None


class DiagnosticSink(ABC):
    """
    Base diagnostic sink.

    Subclasses implement report(); info/warning/error are conveniences.
    """

    @abstractmethod
    def report(self, diagnostic: Diagnostic) -> None:
        ...

    def info(self, message: str, element: Optional[str] = None) -> None:
        self.report(Diagnostic(Severity.INFO, message, element))

    def warning(self, message: str, element: Optional[str] = None) -> None:
        self.report(Diagnostic(Severity.WARNING, message, element))

    def error(self, message: str, element: Optional[str] = None) -> None:
        self.report(Diagnostic(Severity.ERROR, message, element))


@dataclass
class LoggingDiagnosticSink(DiagnosticSink):
    """
    Collects diagnostics and logs each one at the matching level.
    """
    diagnostics: List[Diagnostic] = field(default_factory=list)

    def report(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)

        extra = {"element": diagnostic.element} if diagnostic.element else {}
        if diagnostic.severity == Severity.ERROR:
            logger.error(diagnostic.message, extra=extra)
        elif diagnostic.severity == Severity.WARNING:
            logger.warning(diagnostic.message, extra=extra)
        else:
            logger.info(diagnostic.message, extra=extra)

    def _messages(self, severity: Severity) -> List[str]:
        return [d.message for d in self.diagnostics if d.severity == severity]

    @property
    def infos(self) -> List[str]:
        return self._messages(Severity.INFO)

    @property
    def warnings(self) -> List[str]:
        return self._messages(Severity.WARNING)

    @property
    def errors(self) -> List[str]:
        return self._messages(Severity.ERROR)

    @property
    def has_errors(self) -> bool:
        return any(d.severity == Severity.ERROR for d in self.diagnostics)


__all__ = ["Diagnostic", "DiagnosticSink", "LoggingDiagnosticSink"]
