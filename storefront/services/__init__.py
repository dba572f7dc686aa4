# Storefront Services

from .catalog_client import CatalogApiClient, CatalogApiError
from .catalog_browser import (
    CatalogBrowser,
    BrowserView,
    FilterCriteria,
    LoadState,
    LoadStatus,
    PAGE_SIZE,
)
from .categories import CategoryRegistry, CategoryConfig, CategoryNotFoundError
from .content import parse_content, ContentBlock, BlockType
from .forms import FormValidationError
from .leads import LeadService, LeadResult

__all__ = [
    "CatalogApiClient",
    "CatalogApiError",
    "CatalogBrowser",
    "BrowserView",
    "FilterCriteria",
    "LoadState",
    "LoadStatus",
    "PAGE_SIZE",
    "CategoryRegistry",
    "CategoryConfig",
    "CategoryNotFoundError",
    "parse_content",
    "ContentBlock",
    "BlockType",
    "FormValidationError",
    "LeadService",
    "LeadResult",
]
