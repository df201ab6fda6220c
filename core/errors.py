"""Exception types raised by the Spendlens orchestration layer."""

from __future__ import annotations

__all__ = [
    "SpendlensError",
    "StatementAnalysisError",
    "ReflectionError",
    "FileProcessingError",
    "FileProcessingTimeout",
]


class SpendlensError(RuntimeError):
    """Base class for failures surfaced to HTTP callers."""


class StatementAnalysisError(SpendlensError):
    """Raised when statements cannot be analysed by the model."""


class ReflectionError(SpendlensError):
    """Raised when reflection prompts cannot be generated."""


class FileProcessingError(SpendlensError):
    """Raised when an uploaded file ends in a failed state."""

    def __init__(self, file_id: str, message: str) -> None:
        super().__init__(message)
        self.file_id = file_id


class FileProcessingTimeout(FileProcessingError):
    """Raised when an uploaded file is not ready within the allowed wait."""

    def __init__(self, file_id: str, waited: float, attempts: int) -> None:
        super().__init__(
            file_id,
            f"File {file_id} was not ready after {waited:.1f}s ({attempts} checks)",
        )
        self.waited = waited
        self.attempts = attempts
