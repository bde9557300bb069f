"""Line-numbered diagnostics.

A diagnostic is a non-fatal warning about the document: an unknown command,
an empty list, a formatting code where none is allowed. The parser collects
them in order and logs each one as it is produced.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A warning attached to a source line.

    Attributes:
        lineno: Line on which the offending block starts (1-indexed)
        message: Human readable description
        source_file: Source file path (optional, for multi-file builds)
    """

    lineno: int
    message: str
    source_file: str | None = None

    def __str__(self) -> str:
        """Format like ``file.pod:10: message`` or ``line 10: message``."""
        if self.source_file:
            return f"{self.source_file}:{self.lineno}: {self.message}"
        return f"line {self.lineno}: {self.message}"
