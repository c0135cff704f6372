"""
Basic exception classes for packnga.

This module contains the exception hierarchy raised by the task definitions.
Every failure aborts the running task; nothing here is retried.
"""

from __future__ import annotations

from enum import Enum


class ErrorCategory(Enum):
    """Categories of errors for reporting."""

    CONFIGURATION = "configuration"
    MISSING_FILE = "missing_file"
    COMMAND = "command"
    TEMPLATE = "template"
    UNKNOWN = "unknown"


class PackngaError(Exception):
    """Base exception class for packnga specific errors."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        context: object | None = None,
    ) -> None:
        super().__init__(message)
        self.category: ErrorCategory = category
        self.context: object | None = context


class ConfigurationError(PackngaError):
    """Configuration-related errors, including missing environment overrides."""

    def __init__(self, message: str, context: object | None = None) -> None:
        super().__init__(
            message,
            category=ErrorCategory.CONFIGURATION,
            context=context,
        )


class MissingFileError(PackngaError):
    """A required file or directory does not exist."""

    def __init__(self, path: object, message: str | None = None) -> None:
        super().__init__(
            message or f"Required path does not exist: {path}",
            category=ErrorCategory.MISSING_FILE,
            context=path,
        )
        self.path: object = path


class CommandError(PackngaError):
    """An external command failed or could not be started."""

    def __init__(
        self,
        message: str,
        command: list[str],
        returncode: int | None = None,
        stderr: str | None = None,
    ) -> None:
        super().__init__(
            message,
            category=ErrorCategory.COMMAND,
            context=command,
        )
        self.command: list[str] = command
        self.returncode: int | None = returncode
        self.stderr: str | None = stderr


class TemplateError(PackngaError):
    """HTML template loading or rendering errors."""

    def __init__(self, message: str, context: object | None = None) -> None:
        super().__init__(
            message,
            category=ErrorCategory.TEMPLATE,
            context=context,
        )
