# -*- coding: utf-8 -*-
"""Exception taxonomy shared by the wrapper, the extractor and the command lines.

Per-file problems (``ParseFailure``, ``WriteFailure``) are contained by the
orchestrator: the file is logged and skipped. ``ConfigurationError`` is raised
before any file is touched.
"""
from __future__ import annotations

from typing import Optional

__all__ = [
    "I18nToolsError",
    "ParseFailure",
    "WriteFailure",
    "ConfigurationError",
]


class I18nToolsError(Exception):
    """Base exception for i18nexus tools."""


class ParseFailure(I18nToolsError):
    """Raised when a source file cannot be parsed."""

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ) -> None:
        self.message = message
        self.path = path
        self.line = line
        self.column = column
        super().__init__(self._format())

    def _format(self) -> str:
        where = self.path or "<source>"
        if self.line is not None:
            where = f"{where}:{self.line}:{self.column or 0}"
        return f"{where}: {self.message}"


class WriteFailure(I18nToolsError):
    """Raised when a transformed file cannot be written back."""

    def __init__(self, path: str, message: str) -> None:
        super().__init__(f"{path}: {message}")
        self.path = path
        self.message = message


class ConfigurationError(I18nToolsError):
    """Raised when configuration is missing, unreadable or invalid."""
