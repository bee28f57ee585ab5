"""Exception hierarchy for jsanalyzer.

ParseError and ResolutionError are recovered by the pipeline and surfaced
as warnings. ProjectAccessError and ConfigError abort the run.
"""

from typing import Dict, Optional


class AnalyzerError(Exception):
    """Base exception for all jsanalyzer errors."""

    def __init__(self, message: str, details: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class ParseError(AnalyzerError):
    """Raised when a single source file cannot be read or parsed."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            f"Cannot parse {path}: {reason}",
            details={"path": path},
        )
        self.path = path
        self.reason = reason


class ResolutionError(AnalyzerError):
    """Raised when no dependency edge map can be built for a project."""

    def __init__(self, root: str, reason: str):
        super().__init__(
            f"Cannot resolve module graph for {root}: {reason}",
            details={"root": root},
        )
        self.root = root
        self.reason = reason


class ProjectAccessError(AnalyzerError):
    """Raised when the project root itself cannot be listed."""

    def __init__(self, root: str, reason: str):
        super().__init__(
            f"Cannot access project directory: {root}",
            details={"reason": reason},
        )
        self.root = root
        self.reason = reason


class ConfigError(AnalyzerError):
    """Raised for unreadable or invalid configuration."""

    def __init__(self, reason: str, source: Optional[str] = None):
        details = {"source": source} if source else None
        super().__init__(f"Invalid configuration: {reason}", details=details)
        self.reason = reason
        self.source = source
