"""
Incremental Catalog Browser

Keeps a growing, server-ordered list of product search results for one
page view. Filter changes restart pagination at page 1; the prefetch
trigger appends the next page. Every fetch is tagged with the criteria
session and page it was issued for, and a response only commits while
that tag is still the active one, so a slow response for an older
filter selection can never overwrite the current list.

All methods must be called from the event loop that runs the fetches.
"""

import re
import asyncio
import logging
from typing import Optional, Any, Protocol
from dataclasses import dataclass, field
from enum import Enum

import httpx

from .categories import CategoryRegistry
from .catalog_client import CatalogApiError

logger = logging.getLogger(__name__)

PAGE_SIZE = 10

_SEARCHABLE = re.compile(r"[A-Za-z0-9]")


def is_meaningful_search(text: Optional[str]) -> bool:
    """True when the text has at least one ASCII letter or digit"""
    return bool(text) and _SEARCHABLE.search(text) is not None


class ProductSearcher(Protocol):
    """Anything that can fetch one page of product search results"""

    async def search_products(
        self,
        plant_id: str,
        nature_id: Optional[str] = None,
        page: int = 1,
        limit: int = PAGE_SIZE,
        search: Optional[str] = None,
    ) -> dict:
        ...


class LoadStatus(str, Enum):
    """Fetch state of the browser"""
    IDLE = "idle"
    LOADING = "loading"
    ERROR = "error"


@dataclass(frozen=True)
class LoadState:
    """Current load status, with the failure message when in error"""
    status: LoadStatus = LoadStatus.IDLE
    message: Optional[str] = None

    @classmethod
    def idle(cls) -> "LoadState":
        return cls(LoadStatus.IDLE)

    @classmethod
    def loading(cls) -> "LoadState":
        return cls(LoadStatus.LOADING)

    @classmethod
    def error(cls, message: str) -> "LoadState":
        return cls(LoadStatus.ERROR, message)

    @property
    def is_loading(self) -> bool:
        return self.status is LoadStatus.LOADING

    @property
    def is_error(self) -> bool:
        return self.status is LoadStatus.ERROR


@dataclass(frozen=True)
class FilterCriteria:
    """Active query shape; compared field by field"""
    category_key: Optional[str] = None
    nature_id: Optional[str] = None
    search_text: str = ""

    @property
    def search_term(self) -> Optional[str]:
        """Search text to forward upstream, or None when it is meaningless"""
        if not is_meaningful_search(self.search_text):
            return None
        return self.search_text.strip()


@dataclass(frozen=True)
class PageCursor:
    """Current page number and fixed page size"""
    page_number: int = 1
    page_size: int = PAGE_SIZE

    def next(self) -> "PageCursor":
        return PageCursor(self.page_number + 1, self.page_size)


@dataclass
class ResultSet:
    """Accumulated results for the active criteria"""
    items: list = field(default_factory=list)
    total_count: int = 0
    has_more: bool = True


@dataclass(frozen=True)
class ProductQuery:
    """Parameters of one product search request"""
    plant_id: str
    page: int
    limit: int
    nature_id: Optional[str] = None
    search: Optional[str] = None

    def as_kwargs(self) -> dict[str, Any]:
        return {
            "plant_id": self.plant_id,
            "nature_id": self.nature_id,
            "page": self.page,
            "limit": self.limit,
            "search": self.search,
        }


@dataclass(frozen=True)
class FetchTag:
    """Identifies the criteria session and page a fetch was issued for"""
    generation: int
    criteria: FilterCriteria
    page_number: int


@dataclass(frozen=True)
class BrowserView:
    """Read-only snapshot for rendering"""
    items: tuple
    total_count: int
    has_more: bool
    load_state: LoadState
    page_number: int

    @property
    def error(self) -> Optional[str]:
        return self.load_state.message if self.load_state.is_error else None

    @property
    def can_request_more(self) -> bool:
        """Whether the prefetch trigger should be armed"""
        return self.has_more and self.load_state.status is LoadStatus.IDLE

    def to_dict(self) -> dict[str, Any]:
        return {
            "items": list(self.items),
            "totalCount": self.total_count,
            "hasMore": self.has_more,
            "page": self.page_number,
            "loadState": {
                "status": self.load_state.status.value,
                "message": self.load_state.message,
            },
            "canRequestMore": self.can_request_more,
        }


class CatalogBrowser:
    """
    Server-paginated product listing with filter reset and prefetch.

    Usage:
        browser = CatalogBrowser(client, categories)
        browser.set_filters(FilterCriteria(category_key="bitumen"))
        await browser.wait()
        browser.on_scroll(last_visible_index)
        view = browser.get_view()
    """

    def __init__(
        self,
        client: ProductSearcher,
        categories: CategoryRegistry,
        page_size: int = PAGE_SIZE,
        prefetch_threshold: int = 2,
    ):
        self._client = client
        self._categories = categories
        self.prefetch_threshold = prefetch_threshold

        self._criteria: Optional[FilterCriteria] = None
        self._cursor = PageCursor(page_size=page_size)
        self._results = ResultSet()
        self._state = LoadState.idle()

        self._generation = 0
        self._active_tag: Optional[FetchTag] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def criteria(self) -> Optional[FilterCriteria]:
        return self._criteria

    @property
    def cursor(self) -> PageCursor:
        return self._cursor

    # ==================== Public contract ====================

    def set_filters(self, criteria: FilterCriteria) -> bool:
        """
        Apply new filter criteria.

        Clears the accumulated results and schedules page 1 for the new
        criteria. Returns False (and does nothing) when the criteria are
        unchanged.
        """
        if criteria == self._criteria:
            return False

        logger.debug(f"Filters changed: {self._criteria} -> {criteria}")
        self._criteria = criteria
        self._generation += 1
        self._cursor = PageCursor(1, self._cursor.page_size)
        self._results = ResultSet(items=[], total_count=0, has_more=True)
        self._schedule()
        return True

    def request_more(self) -> bool:
        """
        Schedule the next page.

        Silently ignored unless more results remain and the browser is
        idle. Being idle is stricter than "not loading": in the error
        state this is also a no-op, so the failed page is never skipped.
        Re-issue it with retry() first.
        """
        if self._criteria is None or not self.get_view().can_request_more:
            return False

        self._cursor = self._cursor.next()
        self._schedule()
        return True

    def retry(self) -> bool:
        """Re-issue the failed request for the current criteria and page"""
        if not self._state.is_error:
            return False
        logger.info(f"Retrying page {self._cursor.page_number} for {self._criteria}")
        self._schedule()
        return True

    def on_scroll(self, last_visible_index: int) -> bool:
        """
        Prefetch trigger.

        Requests the next page once the last visible item is within
        `prefetch_threshold` items of the end of the list.
        """
        if not self.get_view().can_request_more:
            return False
        if last_visible_index < len(self._results.items) - self.prefetch_threshold:
            return False
        return self.request_more()

    def get_view(self) -> BrowserView:
        """Current results and load state"""
        return BrowserView(
            items=tuple(self._results.items),
            total_count=self._results.total_count,
            has_more=self._results.has_more,
            load_state=self._state,
            page_number=self._cursor.page_number,
        )

    async def wait(self) -> BrowserView:
        """Wait until the most recently scheduled fetch has settled"""
        while self._task is not None and not self._task.done():
            await asyncio.wait({self._task})
        return self.get_view()

    # ==================== Fetching ====================

    def build_query(self) -> Optional[ProductQuery]:
        """Query for the current criteria and page, or None without a plant"""
        if self._criteria is None:
            return None
        plant_id = self._categories.plant_id_for(self._criteria.category_key)
        if not plant_id:
            return None
        return ProductQuery(
            plant_id=plant_id,
            page=self._cursor.page_number,
            limit=self._cursor.page_size,
            nature_id=self._criteria.nature_id or None,
            search=self._criteria.search_term,
        )

    def _schedule(self) -> None:
        tag = FetchTag(self._generation, self._criteria, self._cursor.page_number)
        self._active_tag = tag

        query = self.build_query()
        if query is None:
            logger.debug(f"No plant for category {self._criteria.category_key!r} - fetch skipped")
            self._results.has_more = False
            self._state = LoadState.idle()
            self._task = None
            return

        self._state = LoadState.loading()
        self._task = asyncio.get_running_loop().create_task(self._fetch(tag, query))

    async def _fetch(self, tag: FetchTag, query: ProductQuery) -> None:
        logger.debug(f"Fetching products page {query.page} (generation {tag.generation})")
        try:
            data = await self._client.search_products(**query.as_kwargs())
        except CatalogApiError as e:
            self._fail(tag, e.message)
        except httpx.TimeoutException:
            self._fail(tag, "Request timed out")
        except (httpx.HTTPError, ValueError) as e:
            self._fail(tag, str(e) or "Failed to fetch products")
        else:
            self._commit(tag, data or {})

    def _is_current(self, tag: FetchTag) -> bool:
        return tag == self._active_tag

    def _commit(self, tag: FetchTag, data: dict) -> None:
        if not self._is_current(tag):
            logger.debug(f"Discarding stale response for page {tag.page_number} (generation {tag.generation})")
            return

        products = list(data.get("products") or [])
        total = int(data.get("total") or 0)

        if tag.page_number == 1:
            self._results.items = products
        else:
            self._results.items.extend(products)
        self._results.total_count = total
        self._results.has_more = tag.page_number * self._cursor.page_size < total
        self._state = LoadState.idle()

        logger.debug(
            f"Committed page {tag.page_number}: {len(self._results.items)}/{total} products"
        )

    def _fail(self, tag: FetchTag, message: str) -> None:
        if not self._is_current(tag):
            logger.debug(f"Ignoring failure of stale request for page {tag.page_number}")
            return
        logger.warning(f"Product fetch failed for page {tag.page_number}: {message}")
        self._state = LoadState.error(message)
