"""
Pytest configuration and shared fixtures

Provides fake catalog API clients:
- FakeCatalog: every search returns a future the test resolves by hand,
  so responses can arrive in any order
- PagedCatalog: serves pages from an in-memory product list at once
"""

import asyncio
from typing import Optional

import pytest

from storefront.services.categories import CategoryRegistry
from storefront.services.catalog_browser import CatalogBrowser


def make_products(count: int, prefix: str = "p", start: int = 1) -> list[dict]:
    """Build opaque product payloads"""
    return [
        {"_id": f"{prefix}{i}", "name": f"Product {prefix}{i}"}
        for i in range(start, start + count)
    ]


async def run_pending(rounds: int = 5) -> None:
    """Let scheduled fetch tasks run up to their next suspension point"""
    for _ in range(rounds):
        await asyncio.sleep(0)


class FakeCatalog:
    """Catalog client whose responses are released by the test"""

    def __init__(self):
        self.calls: list[dict] = []
        self._futures: list[asyncio.Future] = []

    async def search_products(
        self,
        plant_id: str,
        nature_id: Optional[str] = None,
        page: int = 1,
        limit: int = 10,
        search: Optional[str] = None,
    ) -> dict:
        future = asyncio.get_running_loop().create_future()
        self.calls.append({
            "plant_id": plant_id,
            "nature_id": nature_id,
            "page": page,
            "limit": limit,
            "search": search,
        })
        self._futures.append(future)
        return await future

    def resolve(self, index: int, products: list[dict], total: int) -> None:
        self._futures[index].set_result({"products": products, "total": total})

    def fail(self, index: int, error: Exception) -> None:
        self._futures[index].set_exception(error)


class PagedCatalog:
    """Catalog client that slices pages out of a fixed product list"""

    def __init__(self, products: list[dict], total: Optional[int] = None):
        self.products = products
        self.total = len(products) if total is None else total
        self.calls: list[dict] = []

    async def search_products(
        self,
        plant_id: str,
        nature_id: Optional[str] = None,
        page: int = 1,
        limit: int = 10,
        search: Optional[str] = None,
    ) -> dict:
        self.calls.append({
            "plant_id": plant_id,
            "nature_id": nature_id,
            "page": page,
            "limit": limit,
            "search": search,
        })
        start = (page - 1) * limit
        return {"products": self.products[start:start + limit], "total": self.total}


@pytest.fixture
def registry():
    """Category registry with the default categories"""
    return CategoryRegistry()


@pytest.fixture
def bitumen_plant_id(registry):
    return registry.plant_id_for("bitumen")


@pytest.fixture
def fake_catalog():
    return FakeCatalog()


@pytest.fixture
def controlled_browser(fake_catalog, registry):
    """Browser whose fetches resolve only when the test says so"""
    return CatalogBrowser(fake_catalog, registry)


@pytest.fixture
def paged_catalog():
    """25 products served 10 per page"""
    return PagedCatalog(make_products(25))


@pytest.fixture
def paged_browser(paged_catalog, registry):
    return CatalogBrowser(paged_catalog, registry)
