"""
Base Service Client

Shared async HTTP plumbing for clients of the catalog service.
"""

import httpx
import logging
from typing import Optional, Dict, Any
from abc import ABC

logger = logging.getLogger(__name__)


class BaseServiceClient(ABC):
    """
    Base class for service HTTP clients

    Handles:
    1. Base URL resolution
    2. HTTP client lifecycle
    3. Timeout control

    Example:
        class CatalogServiceClient(BaseServiceClient):
            service_name = "catalog_service"
            default_port = 5000

            async def get_album(self, album_id: int):
                response = await self.get(f"/albums/{album_id}")
                return response.json()
    """

    # Subclasses define these
    service_name: str = None
    default_port: int = None

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize service client

        Args:
            base_url: Service base URL, defaults to localhost on default_port
            timeout: Request timeout in seconds
            transport: Optional httpx transport (e.g. ASGITransport in tests)
        """
        if not self.service_name:
            raise ValueError(f"{self.__class__.__name__} must define 'service_name'")

        if base_url:
            self.base_url = base_url.rstrip('/')
        else:
            self.base_url = self._default_url()

        self.client = httpx.AsyncClient(
            timeout=timeout,
            headers=self._build_default_headers(),
            transport=transport,
        )

        logger.debug(f"Initialized {self.service_name} client: {self.base_url}")

    def _default_url(self) -> str:
        default_url = f"http://localhost:{self.default_port}" if self.default_port else "http://localhost:8000"
        logger.debug(f"No base URL for {self.service_name}, using default: {default_url}")
        return default_url

    def _build_default_headers(self) -> Dict[str, str]:
        return {
            "Accept": "application/json",
            "User-Agent": f"album-catalog-client/{self.service_name}",
        }

    async def close(self):
        """Close the HTTP client"""
        await self.client.aclose()
        logger.debug(f"Closed {self.service_name} client")

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    # ========================================
    # HTTP helpers
    # ========================================

    async def get(
        self,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None
    ) -> httpx.Response:
        """GET request"""
        url = f"{self.base_url}{path}"
        return await self.client.get(url, params=params, headers=headers)

    async def health_check(self) -> bool:
        """
        Check whether the service answers its health endpoint

        Returns:
            True if /health returned 200
        """
        try:
            response = await self.get("/health")
            return response.status_code == 200
        except httpx.HTTPError as e:
            logger.warning(f"{self.service_name} health check failed: {e}")
            return False


__all__ = ["BaseServiceClient"]
