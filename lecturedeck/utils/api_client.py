"""
Client for the content backend (modules, materials, document analysis)
"""
from typing import Any, Dict, List, Optional

import requests

from config import settings
from lecturedeck.exceptions import ApiError
from lecturedeck.models.content import Module
from lecturedeck.utils.logger import get_logger

logger = get_logger(__name__)


class StudyApiClient:
    """
    Thin wrapper over the content backend's REST API.

    Also serves as the content provider for study sessions through
    ``fetch_module``.
    """

    def __init__(
        self,
        base_url: str = None,
        access_token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: int = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: Backend API root. Uses settings.CONTENT_API_URL if not provided.
            access_token: Bearer token forwarded to the backend
            session: requests session to reuse (tests inject a fake one)
            timeout: Request timeout in seconds
        """
        self.base_url = (base_url or settings.CONTENT_API_URL).rstrip("/")
        self.access_token = access_token
        self.session = session or requests.Session()
        self.timeout = timeout or settings.REQUEST_TIMEOUT

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        return headers

    def _handle_response(self, response: requests.Response) -> Any:
        if not response.ok:
            try:
                body = response.json()
            except ValueError:
                body = None
            message = (body.get("error") if isinstance(body, dict) else None) or "An error occurred"
            logger.error(f"{response.url} failed with {response.status_code}: {message}")
            raise ApiError(message, status_code=response.status_code)
        return response.json()

    def _request(self, method: str, path: str, payload: Optional[Dict[str, Any]] = None,
                 url: Optional[str] = None, timeout: Optional[int] = None) -> Any:
        target = url or f"{self.base_url}{path}"
        try:
            response = self.session.request(
                method,
                target,
                headers=self._headers(),
                json=payload,
                timeout=timeout or self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"{method} {target} failed: {e}")
            raise ApiError(f"Could not reach content backend: {e}") from e
        return self._handle_response(response)

    # =========================================================================
    # Modules
    # =========================================================================

    def fetch_modules(self) -> List[Module]:
        """List every module of the current user"""
        data = self._request("GET", "/modules")
        return [Module.model_validate(item) for item in data]

    def fetch_module(self, module_id: str) -> Module:
        """Load one module with its materials"""
        data = self._request("GET", f"/modules/{module_id}")
        module = Module.model_validate(data)
        logger.debug(f"Fetched module {module.id} with {len(module.materials)} materials")
        return module

    def create_module(self, title: str, description: str = "") -> Dict[str, Any]:
        return self._request("POST", "/modules", {"title": title, "description": description})

    def delete_module(self, module_id: str) -> Dict[str, Any]:
        return self._request("DELETE", f"/modules/{module_id}")

    # =========================================================================
    # Materials
    # =========================================================================

    def create_material(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/materials", data)

    def update_material(self, material_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PATCH", f"/materials/{material_id}", data)

    def delete_material(self, material_id: str) -> Dict[str, Any]:
        return self._request("DELETE", f"/materials/{material_id}")

    # =========================================================================
    # Analysis
    # =========================================================================

    def analyze_document(self, file_url: str) -> Dict[str, Any]:
        """Ask the analysis service for summary, quiz and flashcards of a document"""
        logger.info(f"Requesting analysis for {file_url}")
        return self._request(
            "POST", "",
            {"fileUrl": file_url},
            url=settings.ANALYZE_API_URL,
            timeout=settings.ANALYZE_TIMEOUT,
        )


# Singleton instance
_api_client = None


def get_api_client() -> StudyApiClient:
    """Get or create API client singleton"""
    global _api_client
    if _api_client is None:
        _api_client = StudyApiClient()
    return _api_client
