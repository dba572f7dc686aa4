"""Catalog browse API used by the infinite-scroll listing script"""

import logging
from typing import Optional
from pydantic import BaseModel, Field
from fastapi import APIRouter, HTTPException, Depends, Query

from ..core.config import settings
from ..core.session import BrowseSession, BrowseSessionManager
from ..services.catalog_browser import BrowserView, FilterCriteria
from .deps import get_browse_sessions

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/browse", tags=["Browse"])


class FiltersRequest(BaseModel):
    """Filter selection sent by the listing page"""
    category_id: Optional[str] = Field(default=None, alias="categoryId")
    nature_id: Optional[str] = Field(default=None, alias="natureId")
    search: str = ""

    class Config:
        populate_by_name = True

    def to_criteria(self) -> FilterCriteria:
        return FilterCriteria(
            category_key=self.category_id or None,
            nature_id=self.nature_id or None,
            search_text=self.search,
        )


class ScrollRequest(BaseModel):
    """Proximity signal from the listing page"""
    last_visible_index: int = Field(alias="lastVisibleIndex", ge=0)

    class Config:
        populate_by_name = True


def _require_session(view_id: str, sessions: BrowseSessionManager) -> BrowseSession:
    session = sessions.get_session(view_id)
    if not session:
        raise HTTPException(status_code=404, detail="Browse view not found")
    return session


def _payload(session: BrowseSession, view: BrowserView) -> dict:
    # pending: a debounced search change has not been applied to the view yet
    return {"viewId": session.view_id, "pending": session.pending, **view.to_dict()}


async def _respond(session: BrowseSession, wait: bool) -> dict:
    view = await session.settle() if wait else session.browser.get_view()
    return _payload(session, view)


@router.post("")
async def create_view(
    request: FiltersRequest,
    wait: bool = Query(True, description="Wait for the first page"),
    sessions: BrowseSessionManager = Depends(get_browse_sessions),
):
    """Open a listing view and load page 1 for the given filters"""
    removed = sessions.cleanup_old_sessions(settings.session_max_age_hours)
    if removed:
        logger.info(f"Pruned {removed} idle browse views")

    session = sessions.create_session()
    session.browser.set_filters(request.to_criteria())
    return await _respond(session, wait)


@router.get("/{view_id}")
async def get_view(
    view_id: str,
    sessions: BrowseSessionManager = Depends(get_browse_sessions),
):
    """Current results and load state"""
    session = _require_session(view_id, sessions)
    return _payload(session, session.browser.get_view())


@router.put("/{view_id}/filters")
async def update_filters(
    view_id: str,
    request: FiltersRequest,
    wait: bool = Query(True),
    sessions: BrowseSessionManager = Depends(get_browse_sessions),
):
    """
    Change filters; restarts from page 1 when they differ.

    A search-only change is debounced. With wait=true the response comes
    after the debounced change and its fetch have settled; otherwise
    `pending` tells the caller the view does not reflect it yet.
    """
    session = _require_session(view_id, sessions)
    session.update_filters(request.to_criteria())
    return await _respond(session, wait)


@router.post("/{view_id}/more")
async def request_more(
    view_id: str,
    wait: bool = Query(True),
    sessions: BrowseSessionManager = Depends(get_browse_sessions),
):
    """Load the next page if one remains and nothing is in flight"""
    session = _require_session(view_id, sessions)
    session.browser.request_more()
    return await _respond(session, wait)


@router.post("/{view_id}/scroll")
async def report_scroll(
    view_id: str,
    request: ScrollRequest,
    wait: bool = Query(True),
    sessions: BrowseSessionManager = Depends(get_browse_sessions),
):
    """Prefetch the next page when the reader nears the end of the list"""
    session = _require_session(view_id, sessions)
    session.browser.on_scroll(request.last_visible_index)
    return await _respond(session, wait)


@router.post("/{view_id}/retry")
async def retry(
    view_id: str,
    wait: bool = Query(True),
    sessions: BrowseSessionManager = Depends(get_browse_sessions),
):
    """Re-issue the failed request"""
    session = _require_session(view_id, sessions)
    session.browser.retry()
    return await _respond(session, wait)


@router.delete("/{view_id}")
async def close_view(
    view_id: str,
    sessions: BrowseSessionManager = Depends(get_browse_sessions),
):
    """Discard a listing view"""
    if sessions.delete_session(view_id):
        return {"message": "Browse view closed"}
    raise HTTPException(status_code=404, detail="Browse view not found")
