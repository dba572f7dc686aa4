"""
Catalog API Client

HTTP client for the remote catalog REST API.
Unwraps the `{"data": ...}` envelope every endpoint responds with.
"""

import logging
from typing import Optional, Any

import httpx

logger = logging.getLogger(__name__)


class CatalogApiError(Exception):
    """Raised when the catalog API answers with a non-2xx status"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class CatalogApiClient:
    """
    Client for the catalog REST API.

    Covers product search, natures, plants, blogs and the lead-capture
    writes (quotes, inquiries, newsletter subscribers).
    """

    def __init__(
        self,
        api_url: str,
        api_token: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize catalog client.

        Args:
            api_url: Root URL of the API, including the version prefix
            api_token: Bearer token sent with lead-capture writes
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = api_url.rstrip("/")
        self._api_token = api_token
        self._http_client = httpx.AsyncClient(timeout=timeout, transport=transport)

        if not api_token:
            logger.debug("No API token provided - lead-capture writes are unauthenticated")

    async def close(self) -> None:
        """Close HTTP client"""
        await self._http_client.aclose()

    def _generate_headers(self, authenticated: bool = False) -> dict[str, str]:
        """Generate request headers, with bearer token when required"""
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if authenticated and self._api_token:
            headers["Authorization"] = f"Bearer {self._api_token}"
        return headers

    @staticmethod
    def _error_message(response: httpx.Response, fallback: str) -> str:
        """Extract `message` from an error payload"""
        try:
            payload = response.json()
        except ValueError:
            return fallback
        if isinstance(payload, dict) and payload.get("message"):
            return str(payload["message"])
        return fallback

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[dict[str, Any]] = None,
        body: Optional[dict] = None,
        authenticated: bool = False,
        error_message: str = "Request failed",
    ) -> Any:
        """Make an HTTP request and return the unwrapped `data` field"""
        url = f"{self.base_url}{path}"
        if params:
            params = {key: value for key, value in params.items() if value is not None}

        response = await self._http_client.request(
            method=method,
            url=url,
            params=params or None,
            headers=self._generate_headers(authenticated),
            json=body,
        )

        if response.status_code >= 400:
            logger.error(f"Request failed: {method} {url} {response.status_code} - {response.text}")
            raise CatalogApiError(
                self._error_message(response, error_message),
                status_code=response.status_code,
            )

        if not response.content:
            return None
        payload = response.json()
        if isinstance(payload, dict) and "data" in payload:
            return payload["data"]
        return payload

    # ==================== Product APIs ====================

    async def search_products(
        self,
        plant_id: str,
        nature_id: Optional[str] = None,
        page: int = 1,
        limit: int = 10,
        search: Optional[str] = None,
    ) -> dict:
        """Search one page of products within a plant"""
        data = await self._request(
            "GET",
            "/products/search",
            params={
                "plantId": plant_id,
                "natureId": nature_id,
                "page": page,
                "limit": limit,
                "search": search,
            },
            error_message="Failed to fetch products",
        )
        data = data or {}
        return {
            "products": data.get("products") or [],
            "total": int(data.get("total") or 0),
        }

    async def list_products(self, limit: int = 3) -> list[dict]:
        """Get the first page of all products"""
        data = await self._request(
            "GET",
            "/products/allProducts",
            params={"page": 1, "limit": limit},
            error_message="Failed to fetch products",
        )
        return (data or {}).get("products") or []

    async def get_product(self, product_id: str) -> dict:
        """Get product details"""
        return await self._request(
            "GET", f"/products/{product_id}", error_message="Failed to fetch product"
        )

    # ==================== Nature APIs ====================

    async def search_natures(self, plant_id: str) -> list[dict]:
        """Get product natures (subtypes) offered by a plant"""
        data = await self._request(
            "GET",
            "/natures/search",
            params={"plantId": plant_id},
            error_message="Failed to fetch natures",
        )
        return data or []

    async def get_nature(self, nature_id: str) -> dict:
        """Get nature details"""
        return await self._request(
            "GET", f"/natures/{nature_id}", error_message="Failed to fetch nature"
        )

    # ==================== Plant APIs ====================

    async def get_plants_with_stats(self) -> list[dict]:
        """Get plants with product counts and top natures"""
        data = await self._request(
            "GET", "/plants-with-stats", error_message="Failed to fetch plants with stats"
        )
        return data or []

    async def get_plants_with_products(self) -> list[dict]:
        """Get plants with their product availability"""
        data = await self._request(
            "GET", "/plants/with-products", error_message="Failed to fetch plants with products"
        )
        return data or []

    # ==================== Blog APIs ====================

    async def list_blogs(
        self,
        category: Optional[str] = None,
        featured: Optional[bool] = None,
        limit: Optional[int] = None,
        exclude_slug: Optional[str] = None,
    ) -> list[dict]:
        """List blog posts, optionally filtered"""
        params: dict[str, Any] = {}
        if category and category != "All":
            params["category"] = category
        if featured is not None:
            params["featured"] = "true" if featured else "false"
        if limit:
            params["limit"] = limit
        if exclude_slug:
            params["excludeSlug"] = exclude_slug

        data = await self._request(
            "GET", "/blogs", params=params, error_message="Failed to fetch blogs"
        )
        return data or []

    async def get_blog_by_slug(self, slug: str) -> dict:
        """Get a blog post by its slug"""
        return await self._request(
            "GET", f"/blogs/slug/{slug}", error_message="Failed to fetch blog"
        )

    # ==================== Lead Capture APIs ====================

    async def create_quote(self, quote: dict) -> dict:
        """Submit a quote request"""
        return await self._request(
            "POST",
            "/quotes/create",
            body={**quote, "status": "New"},
            authenticated=True,
            error_message="Failed to create quote",
        )

    async def create_inquiry(self, inquiry: dict) -> dict:
        """Submit a contact inquiry"""
        return await self._request(
            "POST",
            "/inquires/create",
            body={**inquiry, "status": "New"},
            authenticated=True,
            error_message="Failed to create inquiry",
        )

    async def subscribe(self, email: str) -> Optional[dict]:
        """Subscribe an email address to the newsletter"""
        return await self._request(
            "POST",
            "/subscribers",
            body={"email": email},
            error_message="Failed to subscribe",
        )

    async def unsubscribe(self, subscriber_id: str) -> None:
        """Remove a newsletter subscriber"""
        await self._request(
            "DELETE",
            f"/subscribers/{subscriber_id}",
            error_message="Failed to unsubscribe",
        )
