from __future__ import annotations
import logging
from typing import Any, Dict, Optional, Union

import requests

from .config import Settings
from .errors import UpstreamError

logger = logging.getLogger(__name__)

WorkflowId = Union[int, str]


class N8nClient:
    """
    Thin wrapper around the n8n REST API for workflows.
    Every non-2xx answer and every transport failure surfaces as UpstreamError.
    """

    def __init__(self, base_url: str, api_key: str, timeout: float = 30.0,
                 session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.headers = {"Content-Type": "application/json", "X-N8N-API-KEY": api_key}

    @classmethod
    def from_settings(cls, settings: Settings) -> "N8nClient":
        settings.require_n8n()
        return cls(settings.n8n_url, settings.n8n_api_key, timeout=settings.timeout)

    # --------------------- helpers ---------------------

    def _request(self, method: str, path: str, **kwargs) -> Any:
        url = f"{self.base_url}{path}"
        logger.debug("%s %s", method, url)
        try:
            r = self.session.request(method, url, headers=self.headers, timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            raise UpstreamError(path, None, str(exc)) from exc
        if not r.ok:
            logger.warning("n8n %s %s failed with %s", method, path, r.status_code)
            raise UpstreamError(path, r.status_code, r.text)
        if not r.content:
            return None
        try:
            return r.json()
        except ValueError as exc:
            raise UpstreamError(path, r.status_code, f"invalid JSON: {r.text[:200]}") from exc

    # ---------------------- CRUD ----------------------

    def create_workflow(self, name: str, workflow: Dict[str, Any]) -> Dict[str, Any]:
        """POST the graph; ``workflow`` keys are merged next to ``name``."""
        created = self._request("POST", "/rest/workflows", json={"name": name, **workflow})
        logger.info("created workflow %r as %s", name, created.get("id"))
        return created

    def activate_workflow(self, workflow_id: WorkflowId) -> None:
        self._request("POST", f"/rest/workflows/{workflow_id}/activate")

    def deactivate_workflow(self, workflow_id: WorkflowId) -> None:
        self._request("POST", f"/rest/workflows/{workflow_id}/deactivate")

    def get_workflow(self, workflow_id: WorkflowId) -> Dict[str, Any]:
        return self._request("GET", f"/rest/workflows/{workflow_id}")

    def list_workflows(self, limit: int = 20, offset: int = 0) -> Any:
        return self._request("GET", f"/rest/workflows?limit={limit}&offset={offset}")

    def delete_workflow(self, workflow_id: WorkflowId) -> None:
        self._request("DELETE", f"/rest/workflows/{workflow_id}")
