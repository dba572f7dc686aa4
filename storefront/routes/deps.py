"""Shared service instances for the routers"""

import os
from typing import Optional

from fastapi.templating import Jinja2Templates

from ..core.config import settings
from ..core.session import BrowseSessionManager
from ..services.catalog_client import CatalogApiClient
from ..services.catalog_browser import CatalogBrowser
from ..services.categories import CategoryRegistry
from ..services.leads import LeadService

# Initialize services lazily so tests can override them
catalog_client: Optional[CatalogApiClient] = None
category_registry: Optional[CategoryRegistry] = None
browse_sessions: Optional[BrowseSessionManager] = None
lead_service: Optional[LeadService] = None

templates_dir = os.path.join(os.path.dirname(__file__), "..", "templates")
templates = Jinja2Templates(directory=templates_dir)


def get_catalog_client() -> CatalogApiClient:
    """Get or create catalog API client"""
    global catalog_client
    if catalog_client is None:
        catalog_client = CatalogApiClient(
            api_url=settings.api_url,
            api_token=settings.api_token,
            timeout=settings.request_timeout,
        )
    return catalog_client


def get_category_registry() -> CategoryRegistry:
    """Get or create category registry"""
    global category_registry
    if category_registry is None:
        category_registry = CategoryRegistry(plant_id_overrides=settings.plant_id_overrides())
    return category_registry


def get_browse_sessions() -> BrowseSessionManager:
    """Get or create browse session manager"""
    global browse_sessions
    if browse_sessions is None:
        browse_sessions = BrowseSessionManager(
            browser_factory=lambda: CatalogBrowser(
                client=get_catalog_client(),
                categories=get_category_registry(),
                page_size=settings.page_size,
                prefetch_threshold=settings.prefetch_threshold,
            ),
            debounce_seconds=settings.search_debounce_seconds,
        )
    return browse_sessions


def get_lead_service() -> LeadService:
    """Get or create lead service"""
    global lead_service
    if lead_service is None:
        lead_service = LeadService(
            client=get_catalog_client(),
            whatsapp_number=settings.whatsapp_number,
        )
    return lead_service


async def close_services() -> None:
    """Release the shared HTTP client"""
    global catalog_client
    if catalog_client is not None:
        await catalog_client.close()
        catalog_client = None
