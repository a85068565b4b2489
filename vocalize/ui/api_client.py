"""
Synchronous HTTP client for the Vocalize backend API.

Uses ``httpx.Client`` (sync) because Streamlit scripts run synchronously.
"""

import logging

import httpx
import streamlit as st

logger = logging.getLogger(__name__)


class APIError(Exception):
    """User-friendly API error with categorized message.

    Categories: "connection", "timeout", "http", "network", "unknown".
    For "http" errors ``code`` carries the backend's error code
    (e.g. ``VALIDATION_ERROR``) and ``status_code`` the HTTP status.
    """

    def __init__(
        self,
        message: str,
        category: str = "unknown",
        code: str | None = None,
        status_code: int | None = None,
    ) -> None:
        self.message = message
        self.category = category
        self.code = code
        self.status_code = status_code
        super().__init__(message)


class APIClient:
    """Thin synchronous wrapper around httpx for calling the FastAPI backend.

    All methods return parsed JSON or raise ``APIError`` with
    user-friendly messages for display in the UI.
    """

    def __init__(self, base_url: str = "http://localhost:8000", timeout: float = 60.0) -> None:
        """Initialize the HTTP client.

        Args:
            base_url: Base URL of the Vocalize FastAPI backend.
            timeout: Default request timeout in seconds.
        """
        self._base_url = base_url.rstrip("/")
        self._client = httpx.Client(base_url=self._base_url, timeout=timeout)

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        """Execute an HTTP request with user-friendly error handling.

        Raises:
            APIError: On connection, timeout, HTTP status, or network errors.
        """
        try:
            resp = getattr(self._client, method)(path, **kwargs)
            resp.raise_for_status()
            return resp
        except httpx.ConnectError:
            raise APIError(
                "Backend server is not running. "
                "Start it with: `uvicorn vocalize.api.app:app --reload --port 8000`",
                category="connection",
            ) from None
        except httpx.TimeoutException:
            raise APIError(
                "Request timed out. The server may be overloaded.",
                category="timeout",
            ) from None
        except httpx.HTTPStatusError as exc:
            code = None
            try:
                body = exc.response.json()
                detail = body.get("detail", exc.response.text)
                code = body.get("code")
            except Exception:
                detail = exc.response.text or str(exc)
            raise APIError(
                str(detail),
                category="http",
                code=code,
                status_code=exc.response.status_code,
            ) from None
        except httpx.HTTPError as exc:
            raise APIError(f"Network error: {exc}", category="network") from None

    # -- health --

    def health_check(self) -> dict:
        return self._request("get", "/health").json()

    def check_connection(self) -> tuple[bool, str]:
        """Check if the backend is reachable. Returns (ok, message)."""
        try:
            self.health_check()
            return True, "Connected"
        except APIError as exc:
            return False, exc.message

    # -- scoring --

    def score(self, ratings: dict) -> dict:
        """Score nine camelCase 1-5 ratings. Returns the ScoreReport JSON."""
        return self._request("post", "/api/score", json=ratings).json()

    def ai_score(self, transcription: str) -> dict:
        return self._request(
            "post", "/api/ai-score", json={"transcription": transcription}, timeout=120.0
        ).json()

    def generate_suggestions(self, categories: list[dict]) -> list[dict]:
        """Request suggestions for ``[{"name", "score"}]`` category scores."""
        body = self._request(
            "post",
            "/api/generate-suggestions",
            json={"categories": categories},
            timeout=120.0,
        ).json()
        return body.get("suggestions", [])

    # -- transcription --

    def transcribe(self, audio_data_url: str) -> str:
        body = self._request(
            "post", "/api/transcribe", json={"audio": audio_data_url}, timeout=120.0
        ).json()
        return body["transcription"]


@st.cache_resource
def get_api_client(base_url: str = "http://localhost:8000") -> APIClient:
    """Return a cached APIClient, keyed by base_url.

    Uses Streamlit's ``cache_resource`` to persist the client across reruns.
    When the base URL changes (e.g. user updates sidebar), a new client
    is created automatically because the cache key includes the parameter.
    """
    return APIClient(base_url=base_url)
