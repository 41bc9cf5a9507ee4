from __future__ import annotations
from typing import Optional


class Plan2N8nError(Exception):
    """Base class for errors raised outside the renderer."""


class ConfigError(Plan2N8nError):
    pass


class UpstreamError(Plan2N8nError):
    """n8n rejected a request or could not be reached.

    ``status`` is the HTTP status code, or ``None`` for transport failures.
    """

    def __init__(self, path: str, status: Optional[int], message: str):
        self.path = path
        self.status = status
        self.message = message
        super().__init__(f"n8n {path} {status if status is not None else 'unreachable'}: {message}")
