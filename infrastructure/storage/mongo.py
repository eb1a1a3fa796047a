"""MongoDB-backed link store.

Clicks are embedded in the link document; a single update_one with
``$push`` + ``$inc`` appends the event and bumps the counter together, so
``click_count`` always equals the length of ``clicks``.

Datetimes are written as naive UTC (BSON has no zone) and read back through
the Link validators, which re-attach UTC.
"""

from datetime import datetime
from typing import Any, Optional

from bson import ObjectId
from pymongo import ASCENDING, DESCENDING
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError, PyMongoError

from errors import CodeConflictError
from schemas.models.link import ClickEvent, Link
from shared.datetime_utils import ensure_utc
from shared.logging import get_logger

log = get_logger(__name__)


def _naive_utc(value: datetime) -> datetime:
    return ensure_utc(value).replace(tzinfo=None)


def _click_to_mongo(click: ClickEvent) -> dict[str, Any]:
    doc = click.to_mongo()
    doc["timestamp"] = _naive_utc(click.timestamp)
    return doc


def _link_to_mongo(link: Link) -> dict[str, Any]:
    doc = link.to_mongo()
    doc["created_at"] = _naive_utc(link.created_at)
    doc["expires_at"] = _naive_utc(link.expires_at)
    doc["clicks"] = [_click_to_mongo(click) for click in link.clicks]
    return doc


class MongoLinkStore:
    def __init__(self, collection: Collection) -> None:
        self._collection = collection

    def ensure_indexes(self) -> None:
        self._collection.create_index([("short_code", ASCENDING)], unique=True)
        self._collection.create_index([("created_at", DESCENDING)])

    def insert(self, link: Link) -> None:
        try:
            self._collection.insert_one(_link_to_mongo(link))
        except DuplicateKeyError as e:
            raise CodeConflictError(
                f"short code '{link.short_code}' is already in use",
                field="short_code",
            ) from e

    def delete(self, link_id: ObjectId) -> bool:
        result = self._collection.delete_one({"_id": link_id})
        return result.deleted_count == 1

    def find_by_code(self, short_code: str) -> Optional[Link]:
        return Link.from_mongo(self._collection.find_one({"short_code": short_code}))

    def find_by_id(self, link_id: ObjectId) -> Optional[Link]:
        return Link.from_mongo(self._collection.find_one({"_id": link_id}))

    def code_exists(self, short_code: str) -> bool:
        return (
            self._collection.find_one({"short_code": short_code}, {"_id": 1})
            is not None
        )

    def count_active(self, now: datetime) -> int:
        return self._collection.count_documents(
            {"expires_at": {"$gt": _naive_utc(now)}}
        )

    def list_recent(self) -> list[Link]:
        # _id breaks created_at ties; ObjectIds from one process increase
        cursor = self._collection.find().sort(
            [("created_at", DESCENDING), ("_id", DESCENDING)]
        )
        return [Link.from_mongo(doc) for doc in cursor]

    def append_click(self, link_id: ObjectId, click: ClickEvent) -> bool:
        result = self._collection.update_one(
            {"_id": link_id},
            {
                "$push": {"clicks": _click_to_mongo(click)},
                "$inc": {"click_count": 1},
            },
        )
        return result.matched_count == 1

    def ping(self) -> bool:
        try:
            self._collection.database.client.admin.command("ping")
            return True
        except PyMongoError as e:
            log.warning("mongo_ping_failed", error=str(e), error_type=type(e).__name__)
            return False
