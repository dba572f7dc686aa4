"""Server-rendered site pages"""

import asyncio
import logging
from typing import Optional

import httpx
from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse
from pydantic import ValidationError

from ..core.config import settings
from ..core.session import BrowseSessionManager
from ..models.blog import Blog, BLOG_CATEGORIES
from ..models.catalog import Nature, Plant, PlantWithStats, Product
from ..models.leads import INQUIRY_PURPOSES, PRODUCT_LINES
from ..services.catalog_browser import FilterCriteria
from ..services.catalog_client import CatalogApiClient, CatalogApiError
from ..services.categories import CategoryConfig, CategoryRegistry
from ..services.content import parse_content
from .deps import (
    templates,
    get_browse_sessions,
    get_catalog_client,
    get_category_registry,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Pages"])

# Upstream failures, including records that do not match the page models
API_ERRORS = (CatalogApiError, httpx.HTTPError, ValidationError)


def _render(request: Request, template: str, status_code: int = 200, **context) -> HTMLResponse:
    context.setdefault("title", settings.app_name)
    context.setdefault("product_lines", PRODUCT_LINES)
    return templates.TemplateResponse(
        request,
        template,
        {"app_name": settings.app_name, **context},
        status_code=status_code,
    )


def _error_page(request: Request, error: Exception, not_found: str) -> HTMLResponse:
    """Render an upstream failure, mapping upstream 404s to a 404 page"""
    if isinstance(error, CatalogApiError) and error.status_code == 404:
        return _render(request, "error.html", status_code=404, message=not_found)
    logger.warning(f"Catalog API unavailable: {error}")
    message = error.message if isinstance(error, CatalogApiError) else "The catalog is temporarily unavailable."
    return _render(request, "error.html", status_code=502, message=message)


async def _open_listing(
    sessions: BrowseSessionManager,
    criteria: FilterCriteria,
) -> tuple[str, dict]:
    """Create a browse view for the page and wait for its first page"""
    sessions.cleanup_old_sessions(settings.session_max_age_hours)
    session = sessions.create_session()
    session.browser.set_filters(criteria)
    view = await session.browser.wait()
    return session.view_id, view.to_dict()


@router.get("/", response_class=HTMLResponse)
async def home(
    request: Request,
    client: CatalogApiClient = Depends(get_catalog_client),
    categories: CategoryRegistry = Depends(get_category_registry),
):
    """Landing page with plant statistics and featured products"""
    plants: list[PlantWithStats] = []
    featured: list[Product] = []
    error: Optional[str] = None
    try:
        plant_data, product_data = await asyncio.gather(
            client.get_plants_with_stats(),
            client.list_products(settings.featured_product_limit),
        )
        plants = [PlantWithStats.model_validate(p) for p in plant_data]
        featured = [Product.model_validate(p) for p in product_data]
    except API_ERRORS as e:
        logger.warning(f"Home page data unavailable: {e}")
        error = "Unable to load catalog highlights right now."

    return _render(
        request,
        "home.html",
        categories=categories.all(),
        plants=plants,
        featured=featured,
        error=error,
    )


@router.get("/about", response_class=HTMLResponse)
async def about(request: Request):
    """Company profile"""
    return _render(request, "about.html", title=f"About | {settings.app_name}")


@router.get("/products", response_class=HTMLResponse)
async def products(
    request: Request,
    category_id: Optional[str] = Query(None, alias="categoryId"),
    nature_id: Optional[str] = Query(None, alias="natureId"),
    search: str = Query(""),
    categories: CategoryRegistry = Depends(get_category_registry),
    sessions: BrowseSessionManager = Depends(get_browse_sessions),
):
    """Product catalog with infinite-scroll listing"""
    category = categories.get(category_id)
    if category is None:
        return _render(
            request,
            "products.html",
            title=f"Products | {settings.app_name}",
            categories=categories.all(),
            category=None,
            view_id=None,
            view=None,
        )

    criteria = FilterCriteria(category_key=category.key, nature_id=nature_id, search_text=search)
    view_id, view = await _open_listing(sessions, criteria)
    return _render(
        request,
        "products.html",
        title=f"{category.name} | {settings.app_name}",
        categories=categories.all(),
        category=category,
        criteria=criteria,
        view_id=view_id,
        view=view,
    )


@router.get("/products/{product_id}", response_class=HTMLResponse)
async def product_detail(
    request: Request,
    product_id: str,
    client: CatalogApiClient = Depends(get_catalog_client),
):
    """Single product with images, availability and brochure"""
    try:
        product = Product.model_validate(await client.get_product(product_id))
    except API_ERRORS as e:
        return _error_page(request, e, "Product not found")

    return _render(
        request,
        "product_detail.html",
        title=f"{product.name} | {settings.app_name}",
        product=product,
    )


async def _nature_counts(
    client: CatalogApiClient,
    category: CategoryConfig,
    natures: list[Nature],
) -> None:
    """Fill in product counts for each nature of a category"""
    results = await asyncio.gather(
        *(
            client.search_products(plant_id=category.plant_id, nature_id=nature.id, page=1, limit=1)
            for nature in natures
        ),
        return_exceptions=True,
    )
    for nature, result in zip(natures, results):
        if isinstance(result, API_ERRORS):
            logger.warning(f"Product count unavailable for nature {nature.id}: {result}")
        elif isinstance(result, BaseException):
            raise result
        else:
            nature.product_count = result["total"]


@router.get("/nature/{category_key}", response_class=HTMLResponse)
async def category_natures(
    request: Request,
    category_key: str,
    client: CatalogApiClient = Depends(get_catalog_client),
    categories: CategoryRegistry = Depends(get_category_registry),
):
    """Product natures offered within a category"""
    category = categories.get(category_key)
    if category is None:
        return _render(
            request,
            "error.html",
            status_code=404,
            message=f'Category "{category_key}" not found. Please select a valid category.',
        )

    try:
        natures = [Nature.model_validate(n) for n in await client.search_natures(category.plant_id)]
        await _nature_counts(client, category, natures)
    except API_ERRORS as e:
        return _error_page(request, e, "Category not found")

    return _render(
        request,
        "natures.html",
        title=f"{category.name} | {settings.app_name}",
        category=category,
        natures=natures,
    )


@router.get("/nature/{category_key}/{nature_id}", response_class=HTMLResponse)
async def nature_detail(
    request: Request,
    category_key: str,
    nature_id: str,
    client: CatalogApiClient = Depends(get_catalog_client),
    categories: CategoryRegistry = Depends(get_category_registry),
    sessions: BrowseSessionManager = Depends(get_browse_sessions),
):
    """Nature overview followed by its product listing"""
    category = categories.get(category_key)
    if category is None:
        return _render(request, "error.html", status_code=404, message="Category not found")

    try:
        nature = Nature.model_validate(await client.get_nature(nature_id))
    except API_ERRORS as e:
        return _error_page(request, e, "Product nature not found")

    criteria = FilterCriteria(category_key=category.key, nature_id=nature.id)
    view_id, view = await _open_listing(sessions, criteria)
    return _render(
        request,
        "nature_detail.html",
        title=f"{nature.name} | {settings.app_name}",
        category=category,
        nature=nature,
        criteria=criteria,
        view_id=view_id,
        view=view,
    )


@router.get("/plant-availability", response_class=HTMLResponse)
async def plant_availability(
    request: Request,
    client: CatalogApiClient = Depends(get_catalog_client),
):
    """Plants and the products each one supplies"""
    try:
        plants = [Plant.model_validate(p) for p in await client.get_plants_with_products()]
    except API_ERRORS as e:
        return _error_page(request, e, "Plants not found")

    return _render(
        request,
        "plant_availability.html",
        title=f"Plant Availability | {settings.app_name}",
        plants=plants,
    )


@router.get("/blog", response_class=HTMLResponse)
async def blog(
    request: Request,
    category: str = Query("All"),
    client: CatalogApiClient = Depends(get_catalog_client),
):
    """Blog listing with category filter"""
    try:
        posts = [Blog.model_validate(b) for b in await client.list_blogs(category=category)]
    except API_ERRORS as e:
        return _error_page(request, e, "Blog not found")

    featured = next((post for post in posts if post.featured), None)
    others = [post for post in posts if post is not featured]

    return _render(
        request,
        "blog.html",
        title=f"Blog | {settings.app_name}",
        selected_category=category,
        blog_categories=BLOG_CATEGORIES,
        featured=featured,
        posts=others,
    )


@router.get("/blog/{slug}", response_class=HTMLResponse)
async def blog_post(
    request: Request,
    slug: str,
    client: CatalogApiClient = Depends(get_catalog_client),
):
    """Single blog post with related articles"""
    try:
        post = Blog.model_validate(await client.get_blog_by_slug(slug))
    except API_ERRORS as e:
        return _error_page(request, e, "Blog post not found")

    try:
        related_data = await client.list_blogs(category=post.category, limit=3, exclude_slug=slug)
        related = [Blog.model_validate(b) for b in related_data]
    except API_ERRORS as e:
        logger.warning(f"Related posts unavailable for {slug}: {e}")
        related = []

    return _render(
        request,
        "blog_post.html",
        title=post.seo_title or f"{post.title} | {settings.app_name}",
        description=post.seo_description or post.excerpt,
        post=post,
        blocks=parse_content(post.content),
        related=related,
    )


@router.get("/contact", response_class=HTMLResponse)
async def contact(request: Request):
    """Contact page with inquiry form"""
    return _render(
        request,
        "contact.html",
        title=f"Contact | {settings.app_name}",
        purposes=INQUIRY_PURPOSES,
    )
