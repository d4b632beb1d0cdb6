# ============================================================================
# INFRASTRUCTURE MODULE
# ============================================================================
# EPOCH: 1 - DDL GENERATION
# STATUS: Infrastructure - Output and diagnostics
# PURPOSE: File sinks for generated scripts and the diagnostic channel
# CREATED: 19 OCT 2026
# ============================================================================
"""
Infrastructure module for the DDL generator.

Provides:
- FileSink: Where generated files go (local directory or memory)
- DiagnosticSink: Where info/warning/error messages go

Usage:
    from infrastructure import LocalFileSink, LoggingDiagnosticSink

    sink = LocalFileSink("build/ddl")
    diagnostics = LoggingDiagnosticSink()
"""

from infrastructure.diagnostics import (
    Diagnostic,
    DiagnosticSink,
    LoggingDiagnosticSink,
)
from infrastructure.file_sink import (
    FileSink,
    LocalFileSink,
    MemoryFileSink,
)

__all__ = [
    # Diagnostics
    'Diagnostic',
    'DiagnosticSink',
    'LoggingDiagnosticSink',
    # File output
    'FileSink',
    'LocalFileSink',
    'MemoryFileSink',
]
