"""BaseService — foundation for the installer services.

Every service receives a :class:`Store` at construction time. The Store
provides transactional access to the database; services own their
transaction boundaries via ``self._store.transaction()``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from talkctl.infrastructure.store import Store


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class GuardService(BaseService):
            def status(self) -> InstallationStatus:
                self._store.retrieve_settings()
                ...
    """

    def __init__(self, store: Store) -> None:
        self._store = store

    @property
    def store(self) -> Store:
        return self._store
