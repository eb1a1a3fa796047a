"""Click recording — the only mutator of a link's click state."""

from __future__ import annotations

from errors import NotFoundError
from infrastructure.storage.protocol import LinkStore
from schemas.models.link import AnalyticsTag, ClickEvent, Link
from shared.clock import Clock, SystemClock
from shared.datetime_utils import truncate_to_millis


class ClickRecorder:
    def __init__(self, store: LinkStore, clock: Clock | None = None) -> None:
        self._store = store
        self._clock = clock or SystemClock()

    def record(self, link: Link, tag: AnalyticsTag) -> ClickEvent:
        """Append one click to *link* and increment its counter by exactly 1.

        Liveness is not checked here; RedirectResolver does that first. The
        store commits the event and the counter in one step, then *link* is
        updated in place to mirror the committed state.
        """
        click = ClickEvent(
            timestamp=truncate_to_millis(self._clock.now()),
            source=tag.source,
            location=tag.location,
        )
        if not self._store.append_click(link.id, click):
            raise NotFoundError(f"link '{link.id}' not found")

        link.clicks.append(click)
        link.click_count += 1
        return click
