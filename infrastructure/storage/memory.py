"""In-process link store.

Links live for the lifetime of the process. Iteration order is kept in a
separate list with the newest link first, matching the registry's listing
order without sorting on timestamps.
"""

from datetime import datetime
from typing import Optional

from bson import ObjectId

from errors import CodeConflictError
from schemas.models.link import ClickEvent, Link


class InMemoryLinkStore:
    def __init__(self) -> None:
        self._links: dict[ObjectId, Link] = {}
        self._ids_by_code: dict[str, ObjectId] = {}
        self._order: list[ObjectId] = []

    def insert(self, link: Link) -> None:
        if link.short_code in self._ids_by_code:
            raise CodeConflictError(
                f"short code '{link.short_code}' is already in use",
                field="short_code",
            )
        self._links[link.id] = link.model_copy(deep=True)
        self._ids_by_code[link.short_code] = link.id
        self._order.insert(0, link.id)

    def delete(self, link_id: ObjectId) -> bool:
        link = self._links.pop(link_id, None)
        if link is None:
            return False
        del self._ids_by_code[link.short_code]
        self._order.remove(link_id)
        return True

    def find_by_code(self, short_code: str) -> Optional[Link]:
        link_id = self._ids_by_code.get(short_code)
        if link_id is None:
            return None
        return self.find_by_id(link_id)

    def find_by_id(self, link_id: ObjectId) -> Optional[Link]:
        link = self._links.get(link_id)
        return link.model_copy(deep=True) if link is not None else None

    def code_exists(self, short_code: str) -> bool:
        return short_code in self._ids_by_code

    def count_active(self, now: datetime) -> int:
        return sum(1 for link in self._links.values() if link.is_active(now))

    def list_recent(self) -> list[Link]:
        return [self._links[link_id].model_copy(deep=True) for link_id in self._order]

    def append_click(self, link_id: ObjectId, click: ClickEvent) -> bool:
        link = self._links.get(link_id)
        if link is None:
            return False
        link.clicks.append(click.model_copy())
        link.click_count += 1
        return True

    def ping(self) -> bool:
        return True
