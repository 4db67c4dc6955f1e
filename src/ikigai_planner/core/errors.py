# src/ikigai_planner/core/errors.py

"""
Error taxonomy.

- ValidationError: a local precondition failed; no remote call was attempted.
- ApiError: the remote service (or the network) failed.
- StoreWiringError: a store was used in a way that can only be a wiring bug.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


class IkigaiError(Exception):
    """Base class for all client-side errors."""


class ValidationError(IkigaiError):
    def __init__(self, field_errors: Mapping[str, str]) -> None:
        self.field_errors: dict[str, str] = dict(field_errors)
        super().__init__("; ".join(self.field_errors.values()) or "Invalid input")


class ApiError(IkigaiError):
    """
    Remote-call failure.

    status is None for transport errors (connection refused, timeout, ...).
    payload is the decoded JSON body when the server sent one.
    """

    def __init__(
        self,
        message: str,
        *,
        status: int | None = None,
        payload: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.payload = payload

    @property
    def server_message(self) -> str | None:
        if isinstance(self.payload, Mapping):
            for key in ("error", "message"):
                val = self.payload.get(key)
                if isinstance(val, str) and val.strip():
                    return val.strip()
        return None


class StoreWiringError(IkigaiError):
    """Programming-contract violation. Never recorded as a remote failure."""


def friendly_error_message(err: BaseException, default: str) -> str:
    """Prefer the server-supplied message; fall back to the per-operation default."""
    if isinstance(err, ApiError):
        return err.server_message or default
    return default
