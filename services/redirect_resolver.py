"""
Redirect resolution.

resolve() turns a short code into its destination URL and records the click.
Lookup, expiry check and recording run under the registry lock, so a call
either records exactly one click and returns the URL or records nothing and
raises.
"""

from __future__ import annotations

from errors import ExpiredError, NotFoundError
from schemas.models.link import AnalyticsTag
from services.click_recorder import ClickRecorder
from services.link_registry import LinkRegistry
from shared.logging import get_logger, should_sample

log = get_logger(__name__)


class RedirectResolver:
    def __init__(self, registry: LinkRegistry, recorder: ClickRecorder) -> None:
        self._registry = registry
        self._recorder = recorder

    def resolve(self, code: str, tag: AnalyticsTag) -> str:
        """Return the original URL for *code*, recording one click.

        Raises:
            NotFoundError: no link has this code.
            ExpiredError: the link exists but its validity window has closed.
        """
        with self._registry.lock:
            try:
                link = self._registry.get_by_code(code)
            except NotFoundError:
                log.info("redirect_failed", reason="not_found", short_code=code)
                raise

            if link.is_expired(self._registry.now()):
                log.info("redirect_failed", reason="expired", short_code=code)
                raise ExpiredError(
                    f"short code '{code}' has expired",
                    details={"expired_at": link.expires_at.isoformat()},
                )

            click = self._recorder.record(link, tag)

        if should_sample("url_redirect"):
            log.info(
                "url_redirect",
                short_code=code,
                original_url=link.original_url,
                source=click.source,
                location=click.location,
                click_count=link.click_count,
            )
        return link.original_url
