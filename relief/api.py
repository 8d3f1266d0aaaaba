"""
HTTP client for the household assessment backend.

The backend owns storage, aggregation and the Excel export; this client only
moves JSON in and bytes out. A call counts as successful when the decoded
body's ``code`` is the literal string "OK" (see ``is_ok``).
"""

import logging
from typing import Any, Dict, Optional

import requests

logger = logging.getLogger(__name__)

ASSESSMENTS_PATH = "/api/assessments"
TODAY_PATH = "/api/assessments/today"
TODAY_STATS_PATH = "/api/assessments/today/stats"
TODAY_EXPORT_PATH = "/api/assessments/today/export"


class ApiError(Exception):
    """Transport failure, timeout, or a body the client cannot decode."""


def is_ok(body: Optional[Dict[str, Any]]) -> bool:
    return isinstance(body, dict) and body.get("code") == "OK"


def error_message(body: Optional[Dict[str, Any]], fallback: str) -> str:
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return fallback


class ReliefApiClient:
    """Thin wrapper over one requests.Session pointed at the backend."""

    def __init__(self, base_url: str = "http://localhost:8000", timeout: float = 30,
                 session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "Accept": "application/json",
            "Content-Type": "application/json",
        })

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> "ReliefApiClient":
        api = cfg.get("api", {})
        return cls(base_url=api.get("base_url", "http://localhost:8000"),
                   timeout=float(api.get("timeout_seconds", 30)))

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        url = f"{self.base_url}{path}"
        try:
            resp = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise ApiError(str(e)) from e
        logger.debug("%s %s -> HTTP %s", method, path, resp.status_code)
        return resp

    def _json(self, resp: requests.Response) -> Dict[str, Any]:
        # Error statuses still carry {code, message}; decode them so the message can be shown.
        try:
            body = resp.json()
        except ValueError as e:
            raise ApiError(f"HTTP {resp.status_code}: response is not JSON") from e
        if not isinstance(body, dict):
            raise ApiError(f"HTTP {resp.status_code}: unexpected response body")
        return body

    def create_assessment(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """POST /api/assessments with the normalized payload."""
        return self._json(self._request("POST", ASSESSMENTS_PATH, json=payload))

    def get_today_assessments(self) -> Dict[str, Any]:
        """GET /api/assessments/today -> {code, data: [...]}"""
        return self._json(self._request("GET", TODAY_PATH))

    def get_today_assessment_stats(self) -> Dict[str, Any]:
        """GET /api/assessments/today/stats -> {code, cards, charts}"""
        return self._json(self._request("GET", TODAY_STATS_PATH))

    def export_today_assessments_excel(self) -> bytes:
        """GET /api/assessments/today/export; returns the raw xlsx bytes."""
        resp = self._request("GET", TODAY_EXPORT_PATH, headers={"Accept": "*/*"})
        if resp.status_code >= 400:
            raise ApiError(f"HTTP {resp.status_code}")
        return resp.content
