"""Exception hierarchy for coverresolver.

Errors fall into two tiers. Configuration and validation errors are fatal for
a batch and are raised before any request goes out. Network errors belong to
a single title: the orchestrator logs them and moves on to the next item.
"""

from __future__ import annotations
from typing import Optional, Any, Iterable


# ============================================================================
# BASE EXCEPTIONS
# ============================================================================

class CoverResolverError(Exception):
    """Base class for every error raised by coverresolver."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


# ============================================================================
# CONFIGURATION ERRORS
# ============================================================================

class ConfigurationError(CoverResolverError):
    """Invalid or incomplete configuration."""
    pass


class UnknownProviderError(ConfigurationError):
    """Provider name not present in the registry."""

    def __init__(self, name: str, available: Iterable[str] = ()):
        available = sorted(available)
        msg = f"Unknown provider: {name}"
        if available:
            msg += f" (choose one of: {', '.join(available)})"
        super().__init__(msg, {"provider": name})
        self.provider = name


class MissingCredentialsError(ConfigurationError):
    """A provider that needs credentials was configured without them."""

    def __init__(self, provider: str, fields: Iterable[str]):
        fields = list(fields)
        super().__init__(
            f"{provider} requires {' and '.join(fields)}",
            {"provider": provider},
        )
        self.provider = provider
        self.fields = fields


# ============================================================================
# VALIDATION ERRORS
# ============================================================================

class ValidationError(CoverResolverError):
    """Input data failed validation."""
    pass


class InputValidationError(ValidationError):
    """The pasted game list is not a JSON array of {title, systemName}."""

    def __init__(self, reason: str, index: Optional[int] = None):
        details = {"index": index} if index is not None else None
        super().__init__(reason, details)
        self.index = index


# ============================================================================
# NETWORKING ERRORS
# ============================================================================

class NetworkError(CoverResolverError):
    """Error talking to a remote service."""
    pass


class MetadataServiceError(NetworkError):
    """A metadata API failed or answered with something unusable."""

    def __init__(self, service: str, reason: str = "", status: Optional[int] = None):
        msg = f"{service} request failed"
        if reason:
            msg += f": {reason}"
        details: dict[str, Any] = {"service": service}
        if status is not None:
            details["status"] = status
        super().__init__(msg, details)
        self.service = service
        self.status = status


# ============================================================================
# HELPER FUNCTIONS
# ============================================================================

def format_exception_chain(exc: Exception, include_traceback: bool = False) -> str:
    """Format an exception together with its chain of causes.

    Args:
        exc: Exception to format
        include_traceback: Whether to render the full traceback instead

    Returns:
        The messages of the chain joined by " -> "
    """
    import traceback

    if include_traceback:
        return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))

    messages = []
    current = exc
    while current is not None:
        if isinstance(current, CoverResolverError):
            messages.append(str(current))
        else:
            messages.append(f"{type(current).__name__}: {current}")
        current = getattr(current, "__cause__", None)

    return " -> ".join(messages)
