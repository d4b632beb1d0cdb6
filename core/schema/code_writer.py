# ============================================================================
# CODE WRITER
# ============================================================================
# EPOCH: 1 - DDL GENERATION
# STATUS: Core - Indentation-tracking line accumulator
# PURPOSE: Collect generated SQL lines for one output file
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: CodeWriter
# DEPENDENCIES: psycopg
# ============================================================================
"""
Code Writer.

Accepts plain strings or psycopg.sql composables (rendered without a
connection). Multi-line text is indented line by line.
"""

from typing import List, Union

from psycopg import sql

Line = Union[str, sql.Composable]


class CodeWriter:
    """
    Indentation-tracking text buffer.

    Usage:
        writer = CodeWriter("    ")
        writer.write_line("CREATE TABLE t (")
        writer.indent()
        writer.write_line("id integer")
        writer.outdent()
        writer.write_line(");")
        text = writer.get_data()
    """

    def __init__(self, indent_string: str = "    "):
        self.indent_string = indent_string
        self._lines: List[str] = []
        self._level = 0

    def indent(self) -> None:
        self._level += 1

    def outdent(self) -> None:
        if self._level > 0:
            self._level -= 1

    def write_line(self, line: Line = "") -> None:
        """Append a line (or an empty line) at the current indentation."""
        if isinstance(line, sql.Composable):
            line = line.as_string(None)

        if not line:
            self._lines.append("")
            return

        prefix = self.indent_string * self._level
        for part in line.split("\n"):
            self._lines.append(prefix + part if part else "")

    def has_content(self) -> bool:
        """True once any non-blank line has been written."""
        return any(line.strip() for line in self._lines)

    def get_data(self) -> str:
        if not self._lines:
            return ""
        return "\n".join(self._lines) + "\n"

    def __len__(self) -> int:
        return len(self._lines)


__all__ = ["CodeWriter"]
