# ============================================================================
# CONFIGURATION MODULE
# ============================================================================
# EPOCH: 1 - DDL GENERATION
# STATUS: Core - Configuration and defaults
# PURPOSE: Centralized configuration management
# CREATED: 19 OCT 2026
# ============================================================================
"""
Configuration Module

Provides centralized options and defaults for the DDL generator.
"""

from core.config.defaults import (
    FormattingDefaults,
    DatabaseDefaults,
    GenerationDefaults,
    MarkerDefaults,
    GeneratorOptions,
    get_defaults,
    reset_defaults,
)

__all__ = [
    "FormattingDefaults",
    "DatabaseDefaults",
    "GenerationDefaults",
    "MarkerDefaults",
    "GeneratorOptions",
    "get_defaults",
    "reset_defaults",
]
