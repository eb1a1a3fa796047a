"""LinkStore protocol — the registry depends on this, not a concrete backend.

Stores are not thread-safe on their own; LinkRegistry serializes access.
Every read returns a fresh Link so callers never hold references into
stored state.
"""

from datetime import datetime
from typing import Optional, Protocol, runtime_checkable

from bson import ObjectId

from schemas.models.link import ClickEvent, Link


@runtime_checkable
class LinkStore(Protocol):
    def insert(self, link: Link) -> None: ...

    def delete(self, link_id: ObjectId) -> bool: ...

    def find_by_code(self, short_code: str) -> Optional[Link]: ...

    def find_by_id(self, link_id: ObjectId) -> Optional[Link]: ...

    def code_exists(self, short_code: str) -> bool: ...

    def count_active(self, now: datetime) -> int: ...

    def list_recent(self) -> list[Link]: ...

    def append_click(self, link_id: ObjectId, click: ClickEvent) -> bool: ...

    def ping(self) -> bool: ...
