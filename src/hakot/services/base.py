"""BaseService — foundation for hakot services.

Every service receives a :class:`DataStore` at construction time and
reads a fresh snapshot from it on each call.  Services keep no state
between calls, so one instance may serve concurrent requests.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from hakot.infrastructure.store import DataStore


class BaseService:
    """Base for service-layer classes.

    Usage::

        class LoginService(BaseService):
            def login(self, username: str, password: str) -> ServiceResult:
                rows = self._store.fetch_all_credentials()
                ...
    """

    def __init__(self, store: DataStore) -> None:
        self._store = store
