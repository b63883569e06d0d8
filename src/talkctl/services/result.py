"""ServiceResult and ServiceError — the contract between services and the CLI.

INVARIANT: Public service operations return ServiceResult; internal steps
raise :class:`~talkctl.services.errors.SetupError` subclasses, which are
converted here at the operation boundary.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from talkctl.services.errors import SetupError


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Universal return type for service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (``"setup"``, ``"migrate"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (stage history, timing).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(
        cls,
        op: str,
        exc: SetupError,
        *,
        meta: dict[str, Any] | None = None,
    ) -> ServiceResult:
        """Build a failed result from a setup error."""
        return cls(
            ok=False,
            op=op,
            error=ServiceError(code=exc.code, message=str(exc), detail=dict(exc.detail)),
            meta=meta,
        )
