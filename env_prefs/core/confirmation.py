"""Confirmation requests for destructive operations.

A caller opens a request and receives a correlation token; the UI later
resolves that token exactly once with confirm or cancel. Only one request
is open at a time, so opening a new one cancels the pending one.
"""

from __future__ import annotations

import logging
import uuid
from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Deque, Dict, Optional

from env_prefs.core.exceptions import ConfirmationError

logger = logging.getLogger(__name__)

ResolveCallback = Callable[[bool], None]

RESOLVED_HISTORY = 64


@dataclass
class ConfirmationRequest:
    """An open or resolved confirmation request."""

    message: str
    title: str = "Confirm"
    confirm_label: str = "OK"
    cancel_label: str = "Cancel"
    token: str = field(default_factory=lambda: uuid.uuid4().hex)
    result: Optional[bool] = None
    on_resolve: Optional[ResolveCallback] = field(default=None, repr=False)

    @property
    def resolved(self) -> bool:
        return self.result is not None


class ConfirmationBroker:
    """Tracks confirmation requests and enforces single resolution.

    Open requests are dropped once resolved. The most recent resolved
    tokens are remembered so a late second resolution is reported as such.
    """

    def __init__(self, resolved_history: int = RESOLVED_HISTORY) -> None:
        self._requests: Dict[str, ConfirmationRequest] = {}
        self._resolved: Deque[str] = deque(maxlen=resolved_history)
        self._pending: Optional[ConfirmationRequest] = None

    @property
    def pending(self) -> Optional[ConfirmationRequest]:
        return self._pending

    @property
    def open_requests(self) -> int:
        return len(self._requests)

    def request(
        self,
        message: str,
        title: str = "Confirm",
        confirm_label: str = "OK",
        cancel_label: str = "Cancel",
        on_resolve: Optional[ResolveCallback] = None,
    ) -> ConfirmationRequest:
        """Open a new request, cancelling any request still pending"""
        if self._pending is not None:
            self.cancel(self._pending.token)

        request = ConfirmationRequest(
            message=message,
            title=title,
            confirm_label=confirm_label,
            cancel_label=cancel_label,
            on_resolve=on_resolve,
        )
        self._requests[request.token] = request
        self._pending = request
        return request

    def confirm(self, token: str) -> ConfirmationRequest:
        return self._resolve(token, True)

    def cancel(self, token: str) -> ConfirmationRequest:
        return self._resolve(token, False)

    def _resolve(self, token: str, confirmed: bool) -> ConfirmationRequest:
        if token in self._resolved:
            raise ConfirmationError(f"Confirmation request {token} already resolved")
        request = self._requests.pop(token, None)
        if request is None:
            raise ConfirmationError(f"Unknown confirmation request: {token}")

        request.result = confirmed
        self._resolved.append(token)
        if self._pending is request:
            self._pending = None
        if request.on_resolve is not None:
            try:
                request.on_resolve(confirmed)
            except Exception:
                logger.exception(f"Confirmation callback failed for {token}")
        return request
