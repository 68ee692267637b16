"""Error Hierarchy — typed, categorized exceptions for every Shuttle failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Local errors (400-level) are recoverable; upstream errors (500-level) never retried
    - to_response() produces the REST envelope: {"success": false, "error": <message>, ...}
    - A failed registry operation raises before touching the collection

Design Decisions:
    - Single hierarchy with ShuttleError base: one FastAPI handler catches all
    - ErrorContext as dataclass: observability fields without coupling to logging
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    AUTHENTICATION = "authentication"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for logs and responses."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    resource_kind: str | None = None
    record_id: str | None = None
    provider: str | None = None
    upstream_status: int | None = None
    debug_info: dict[str, Any] | None = None


class ShuttleError(Exception):
    """Base exception for all Shuttle errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def details(self) -> dict[str, Any] | None:
        """Error-specific payload merged into the response, if any."""
        return None

    def to_response(self) -> dict:
        """Convert to standardized REST error envelope."""
        body: dict[str, Any] = {
            "success": False,
            "error": self.message,
            "code": self.code,
            "category": self.category.value,
            "severity": self.severity.value,
            "timestamp": self.context.timestamp.isoformat(),
        }
        context = {
            "resource_kind": self.context.resource_kind,
            "record_id": self.context.record_id,
            "provider": self.context.provider,
            "upstream_status": self.context.upstream_status,
        }
        context = {k: v for k, v in context.items() if v is not None}
        if context:
            body["context"] = context
        details = self.details()
        if details:
            body["details"] = details
        return body


# ─── Local Errors (400-level) ───────────────────────────────────

class RecordValidationError(ShuttleError):
    """Required fields missing or malformed on create."""
    def __init__(
        self,
        missing_fields: list[str],
        message: str | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message or f"Missing required fields: {', '.join(missing_fields)}",
            "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.missing_fields = missing_fields

    def details(self) -> dict[str, Any]:
        return {"fields": list(self.missing_fields)}


class ResourceNotFoundError(ShuttleError):
    """Operation addressed an id the registry does not hold."""
    def __init__(
        self, resource_kind: str, record_id: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.resource_kind = resource_kind
        ctx.record_id = str(record_id)
        super().__init__(
            f"{resource_kind} '{record_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, ctx, 404,
        )
        self.resource_kind = resource_kind
        self.record_id = str(record_id)


class DuplicateRecordError(ShuttleError):
    """Caller-supplied id already exists in the registry."""
    def __init__(
        self, resource_kind: str, record_id: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.resource_kind = resource_kind
        ctx.record_id = str(record_id)
        super().__init__(
            f"{resource_kind} '{record_id}' already exists",
            "DUPLICATE_RECORD", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, ctx, 409,
        )


class AuthenticationError(ShuttleError):
    """Missing, unknown, or rejected credentials."""
    def __init__(self, message: str = "Unauthorized: Token required",
                 context: ErrorContext | None = None):
        super().__init__(
            message, "AUTHENTICATION_REQUIRED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


# ─── Upstream / Internal Errors (500-level) ─────────────────────

class UpstreamError(ShuttleError):
    """A collaborator (payment or routing provider) call failed."""
    def __init__(
        self,
        provider: str,
        message: str,
        upstream_status: int | None = None,
        http_status: int = 502,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.provider = provider
        ctx.upstream_status = upstream_status
        super().__init__(
            f"{provider} error: {message}",
            "UPSTREAM_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, ctx, http_status,
        )
        self.provider = provider
        self.upstream_status = upstream_status


class ProviderNotConfiguredError(UpstreamError):
    """Collaborator credentials are absent from settings."""
    def __init__(self, provider: str, context: ErrorContext | None = None):
        super().__init__(
            provider, "provider is not configured",
            http_status=503, context=context,
        )
        self.code = "PROVIDER_NOT_CONFIGURED"


class IdGenerationError(ShuttleError):
    """Id strategy produced only colliding ids."""
    def __init__(self, resource_kind: str, attempts: int,
                 context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.resource_kind = resource_kind
        super().__init__(
            f"Could not generate a unique {resource_kind} id after {attempts} attempts",
            "ID_GENERATION_FAILED", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
