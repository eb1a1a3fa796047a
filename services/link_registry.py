"""
Link registry — the authoritative short code → link mapping.

Owns every invariant on the link set:
- short codes are unique among the links currently stored
- at most ``max_active_links`` links may be active when a new one is created
  (an admission check only; links that later expire are never evicted)
- ``expires_at`` is always ``created_at + validity_minutes``

Mutations (create, delete, click recording) run under a single re-entrant
lock, exposed as ``registry.lock`` so RedirectResolver can make lookup,
liveness check and click recording one atomic step. Reads take the same lock
briefly and return copies from the store.
"""

from __future__ import annotations

import threading
from datetime import timedelta
from typing import Any, Callable, Iterable, Optional

from bson import ObjectId

from errors import (
    CapacityExceededError,
    CodeConflictError,
    CodeSpaceExhaustedError,
    InvalidUrlError,
    InvalidValidityPeriodError,
    NotFoundError,
)
from infrastructure.storage.protocol import LinkStore
from schemas.models.link import Link
from shared.clock import Clock, SystemClock
from shared.datetime_utils import truncate_to_millis
from shared.generators import short_code_generator
from shared.logging import get_logger
from shared.validators import (
    parse_validity_minutes,
    validate_custom_code,
    validate_url,
)

log = get_logger(__name__)


class LinkRegistry:
    def __init__(
        self,
        store: LinkStore,
        *,
        clock: Optional[Clock] = None,
        code_generator: Optional[Callable[[], str]] = None,
        max_active_links: int = 5,
        code_max_attempts: int = 10,
        max_validity_minutes: int = 5_256_000,
        reserved_codes: Iterable[str] = (),
    ) -> None:
        self.store = store
        self.clock = clock or SystemClock()
        self._generate = code_generator or short_code_generator(6)
        self.max_active_links = max_active_links
        self.code_max_attempts = code_max_attempts
        self.max_validity_minutes = max_validity_minutes
        self.reserved_codes = frozenset(reserved_codes)
        self.lock = threading.RLock()

    def now(self):
        """Current time at the millisecond precision links are stamped with."""
        return truncate_to_millis(self.clock.now())

    # ── Mutations ────────────────────────────────────────────────────────────

    def create(
        self,
        original_url: str,
        *,
        validity_minutes: Any,
        custom_code: Optional[str] = None,
    ) -> Link:
        """Validate, admit and store a new link.

        Checks run in a fixed order and the first failure wins: URL, validity
        period, capacity, then the custom code. Nothing is stored unless every
        check passes.

        Raises:
            InvalidUrlError, InvalidValidityPeriodError, CapacityExceededError,
            CodeConflictError, CodeSpaceExhaustedError
        """
        if not validate_url(original_url):
            self._reject("invalid_url", original_url=original_url)
            raise InvalidUrlError(
                "original_url must be an absolute http:// or https:// URL",
                field="original_url",
            )

        minutes = parse_validity_minutes(validity_minutes, self.max_validity_minutes)
        if minutes is None:
            self._reject("invalid_validity_period", validity_minutes=validity_minutes)
            raise InvalidValidityPeriodError(
                "validity_minutes must be a positive integer no greater than "
                f"{self.max_validity_minutes}",
                field="validity_minutes",
                details={"max_validity_minutes": self.max_validity_minutes},
            )

        with self.lock:
            now = self.now()

            active = self.store.count_active(now)
            if active >= self.max_active_links:
                self._reject("capacity_exceeded", active_links=active)
                raise CapacityExceededError(
                    f"at most {self.max_active_links} active links are allowed",
                    details={"active": active, "limit": self.max_active_links},
                )

            if custom_code is not None:
                self._check_custom_code(custom_code)
                short_code = custom_code
            else:
                short_code = self._generate_unique_code()

            link = Link(
                short_code=short_code,
                original_url=original_url,
                is_custom=custom_code is not None,
                created_at=now,
                expires_at=now + timedelta(minutes=minutes),
                validity_minutes=minutes,
            )
            self.store.insert(link)

        log.info(
            "link_created",
            link_id=str(link.id),
            short_code=link.short_code,
            original_url=link.original_url,
            is_custom=link.is_custom,
            validity_minutes=minutes,
            expires_at=link.expires_at.isoformat(),
        )
        return link

    def delete(self, link_id: Any) -> None:
        """Remove a link outright; its short code is immediately reusable."""
        oid = _as_object_id(link_id)
        with self.lock:
            deleted = oid is not None and self.store.delete(oid)
        if not deleted:
            raise NotFoundError(f"link '{link_id}' not found", field="link_id")
        log.info("link_deleted", link_id=str(oid))

    # ── Reads ────────────────────────────────────────────────────────────────

    def get(self, code_or_id: str) -> Link:
        """Look a link up by short code, falling back to its id."""
        with self.lock:
            link = self.store.find_by_code(code_or_id)
            if link is None:
                oid = _as_object_id(code_or_id)
                if oid is not None:
                    link = self.store.find_by_id(oid)
        if link is None:
            raise NotFoundError(f"link '{code_or_id}' not found")
        return link

    def get_by_code(self, short_code: str) -> Link:
        with self.lock:
            link = self.store.find_by_code(short_code)
        if link is None:
            raise NotFoundError(f"short code '{short_code}' not found")
        return link

    def list(self) -> list[Link]:
        """All links, most recently created first."""
        with self.lock:
            return self.store.list_recent()

    def active_count(self) -> int:
        with self.lock:
            return self.store.count_active(self.now())

    # ── Internals ────────────────────────────────────────────────────────────

    def _check_custom_code(self, custom_code: str) -> None:
        if not validate_custom_code(custom_code):
            self._reject("invalid_custom_code", custom_code=custom_code)
            raise CodeConflictError(
                "custom code must be non-empty and use only letters, digits, '-' or '_'",
                field="custom_code",
            )
        if custom_code in self.reserved_codes:
            self._reject("code_reserved", custom_code=custom_code)
            raise CodeConflictError(
                f"short code '{custom_code}' is reserved",
                field="custom_code",
            )
        if self.store.code_exists(custom_code):
            self._reject("code_taken", custom_code=custom_code)
            raise CodeConflictError(
                f"short code '{custom_code}' is already in use",
                field="custom_code",
            )

    def _generate_unique_code(self) -> str:
        for _ in range(self.code_max_attempts):
            candidate = self._generate()
            if candidate not in self.reserved_codes and not self.store.code_exists(
                candidate
            ):
                return candidate
        self._reject("code_space_exhausted", attempts=self.code_max_attempts)
        raise CodeSpaceExhaustedError(
            f"no unused short code found after {self.code_max_attempts} attempts"
        )

    @staticmethod
    def _reject(reason: str, **context: Any) -> None:
        log.info("link_creation_rejected", reason=reason, **context)


def _as_object_id(value: Any) -> Optional[ObjectId]:
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    return None
