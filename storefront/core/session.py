"""Browse sessions: one catalog browser per open listing page"""

import uuid
from datetime import datetime
from typing import Callable, Optional
from dataclasses import dataclass, field

from ..services.catalog_browser import BrowserView, CatalogBrowser, FilterCriteria
from ..utils.debounce import Debouncer


@dataclass
class BrowseSession:
    """Listing state owned by one page view"""
    view_id: str
    created_at: datetime
    updated_at: datetime
    browser: CatalogBrowser
    debouncer: Debouncer = field(default_factory=Debouncer)

    def touch(self) -> None:
        """Mark the session as recently used"""
        self.updated_at = datetime.utcnow()

    def update_filters(self, criteria: FilterCriteria) -> None:
        """
        Apply new criteria.

        Category and nature changes apply at once. A change to the search
        text alone is debounced so each keystroke does not restart paging.
        """
        self.touch()
        current = self.browser.criteria
        search_only = (
            current is not None
            and current.category_key == criteria.category_key
            and current.nature_id == criteria.nature_id
            and current.search_text != criteria.search_text
        )
        if search_only:
            self.debouncer.call(self.browser.set_filters, criteria)
        else:
            self.debouncer.cancel()
            self.browser.set_filters(criteria)

    @property
    def pending(self) -> bool:
        """Whether a debounced filter change has yet to be applied"""
        return self.debouncer.pending

    async def settle(self) -> BrowserView:
        """Wait for any debounced filter change, then for its fetch"""
        await self.debouncer.wait()
        return await self.browser.wait()


class BrowseSessionManager:
    """Manages browse sessions"""

    def __init__(
        self,
        browser_factory: Callable[[], CatalogBrowser],
        debounce_seconds: float = 0.4,
    ):
        self.browser_factory = browser_factory
        self.debounce_seconds = debounce_seconds
        self.sessions: dict[str, BrowseSession] = {}

    def create_session(self) -> BrowseSession:
        """Create a new session"""
        now = datetime.utcnow()
        session = BrowseSession(
            view_id=str(uuid.uuid4()),
            created_at=now,
            updated_at=now,
            browser=self.browser_factory(),
            debouncer=Debouncer(self.debounce_seconds),
        )
        self.sessions[session.view_id] = session
        return session

    def get_session(self, view_id: str) -> Optional[BrowseSession]:
        """Get session by ID"""
        session = self.sessions.get(view_id)
        if session:
            session.touch()
        return session

    def delete_session(self, view_id: str) -> bool:
        """Delete a session"""
        session = self.sessions.pop(view_id, None)
        if session is None:
            return False
        session.debouncer.cancel()
        return True

    def cleanup_old_sessions(self, max_age_hours: int = 24) -> int:
        """Remove sessions idle for longer than max_age_hours"""
        now = datetime.utcnow()
        old_sessions = [
            vid for vid, session in self.sessions.items()
            if (now - session.updated_at).total_seconds() > max_age_hours * 3600
        ]
        for vid in old_sessions:
            self.delete_session(vid)
        return len(old_sessions)
