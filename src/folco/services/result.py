"""ServiceResult and ServiceError: the universal command result contract.

INVARIANT: Every CLI command emits exactly one ServiceResult.
Progress events carry ServiceError payloads, so a failure observed in the
stream and a failure in the final result render the same way.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from folco.domain.errors import FolcoError, error_chain


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult or progress event.

    ``message`` is the short summary; ``detail["chain"]`` holds the full
    cause chain for verbose output.
    """

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: BaseException) -> ServiceError:
        """Capture *exc* (and its cause chain) without losing detail."""
        if isinstance(exc, FolcoError):
            code, message, detail = exc.code, exc.message, dict(exc.detail)
        else:
            code, message, detail = type(exc).__name__, str(exc) or type(exc).__name__, {}
        detail["chain"] = error_chain(exc)
        return cls(code=code, message=message, detail=detail)

    @property
    def chain(self) -> list[str]:
        return list(self.detail.get("chain") or [self.message])

    def describe(self, *, verbose: bool = False) -> str:
        """Short message, or the full ``a: b: c`` chain when *verbose*."""
        if verbose:
            return ": ".join(self.chain)
        return self.message


class ServiceResult(BaseModel):
    """Universal return type for command operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"customize"``).
        data: Operation-specific payload.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (timing, counts, etc.).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None
