"""Short link store: shortening, resolution and click statistics."""

import asyncio
import logging
from datetime import tzinfo
from typing import List, Optional

from .analytics import clicks_by_day, clicks_by_hour
from .clock import Clock, utc_now
from .common.validators import is_valid_url, validate_validity_minutes
from .errors import InvalidUrlError, ShortLinkError
from .models import ClickEvent, LinkRecord, LinkStats, LinkView
from .persistence import LinkTable, TablePersistence
from .shortcode import ShortCodeGenerator

DEFAULT_VALIDITY_MINUTES = 30
DIRECT_REFERRER = "direct"


class ShortLinkStore:
    """Owns the in-memory link table and flushes it after every mutation.

    ``shorten`` and ``resolve`` hold a single lock across their
    read-modify-write and the following save, so concurrent callers on the
    event loop can neither lose a click nor hand out the same code twice.
    ``get``, ``list_all`` and ``stats_for`` are pure reads.
    """

    def __init__(
        self,
        persistence: TablePersistence,
        short_code_generator: Optional[ShortCodeGenerator] = None,
        clock: Clock = utc_now,
        base_url: str = "http://localhost:9200",
        path_prefix: str = "",
        stats_tz: Optional[tzinfo] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize the store.

        Args:
            persistence: Adapter that loads/saves the whole table
            short_code_generator: Optional short code generator
            clock: Zero-argument callable returning an aware datetime
            base_url: Origin prefixed to codes to form short URLs
            path_prefix: Optional path between origin and code
            stats_tz: Timezone for hourly/daily aggregation (local when None)
            logger: Optional logger
        """
        self.persistence = persistence
        self.generator = short_code_generator or ShortCodeGenerator()
        self.clock = clock
        self.base_url = base_url
        self.path_prefix = path_prefix
        self.stats_tz = stats_tz
        self.logger = logger or logging.getLogger(__name__)
        self.table: LinkTable = {}
        self._lock = asyncio.Lock()

    async def load(self) -> None:
        """Replace the in-memory table with the persisted one."""
        self.table = await self.persistence.load()

    async def save(self) -> bool:
        return await self.persistence.save(self.table)

    def validate_url(self, url: str) -> bool:
        valid, _ = is_valid_url(url)
        return valid

    def short_url_for(self, short_code: str, base_url: Optional[str] = None) -> str:
        """Public URL for a code, under ``base_url`` or the configured origin."""
        parts = [(base_url or self.base_url).rstrip("/")]
        if self.path_prefix.strip("/"):
            parts.append(self.path_prefix.strip("/"))
        parts.append(short_code)
        return "/".join(parts)

    async def shorten(
        self,
        original_url: str,
        custom_code: Optional[str] = None,
        validity_minutes: int = DEFAULT_VALIDITY_MINUTES,
    ) -> LinkRecord:
        """Create a new short link.

        Args:
            original_url: The original long URL
            custom_code: Optional caller-chosen short code
            validity_minutes: Lifetime of the link in minutes (1-10080)

        Returns:
            The created record

        Raises:
            InvalidUrlError: If the URL is malformed
            InvalidValidityPeriodError: If the validity period is out of range
            InvalidFormatError: If the custom code is not alphanumeric
            InvalidLengthError: If the custom code length is out of range
            CodeTakenError: If the custom code is already in use
            CodeGenerationError: If no free code could be generated
        """
        self.logger.info(
            f"Attempting to shorten URL: {original_url} "
            f"(custom_code={custom_code}, validity_minutes={validity_minutes})"
        )

        try:
            valid, error = is_valid_url(original_url)
            if not valid:
                raise InvalidUrlError(f"Invalid URL format: {error}")
            validate_validity_minutes(validity_minutes)

            async with self._lock:
                short_code = self.generator.generate(self.table.__contains__, custom_code)
                record = LinkRecord.create(
                    original_url=original_url,
                    short_code=short_code,
                    created_at=self.clock(),
                    validity_minutes=validity_minutes,
                )
                self.table[short_code] = record
                await self.save()
        except ShortLinkError as e:
            self.logger.error(f"URL shortening failed: {e}")
            raise

        self.logger.info(f"URL shortened successfully: {short_code} -> {original_url}")
        return record

    def get(self, short_code: str) -> Optional[LinkRecord]:
        """Look up an active record.

        Returns:
            The record, or None if it is absent or expired
        """
        record = self.table.get(short_code)

        if record is None:
            self.logger.warning(f"Short URL not found: {short_code}")
            return None

        if record.is_expired(self.clock()):
            self.logger.warning(
                f"Short URL expired: {short_code} (expired at {record.expires_at.isoformat()})"
            )
            return None

        return record

    async def resolve(
        self,
        short_code: str,
        referrer: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> Optional[str]:
        """Resolve a short code and record the click.

        Args:
            short_code: The short code being visited
            referrer: Referring page, recorded as "direct" when missing
            user_agent: Visitor user agent

        Returns:
            The original URL, or None if the code is absent or expired
        """
        async with self._lock:
            record = self.get(short_code)
            if record is None:
                return None

            record.record_click(ClickEvent(
                timestamp=self.clock(),
                referrer=referrer or DIRECT_REFERRER,
                user_agent=user_agent,
            ))
            await self.save()

        self.logger.info(f"URL accessed: {short_code} -> {record.original_url}")
        return record.original_url

    def list_all(self) -> List[LinkView]:
        """Snapshot of every record, expired ones included, in table order."""
        now = self.clock()
        return [
            LinkView(
                record=record,
                short_url=self.short_url_for(code),
                is_expired=record.is_expired(now),
            )
            for code, record in self.table.items()
        ]

    def find_expired(self, short_code: str) -> Optional[LinkView]:
        """Return the listing entry for ``short_code`` only if it exists and has expired.

        Lets callers tell "expired" apart from "not found" after ``resolve``
        returned None.
        """
        for view in self.list_all():
            if view.record.short_code == short_code and view.is_expired:
                return view
        return None

    def stats_for(self, short_code: str) -> Optional[LinkStats]:
        """Detailed statistics for one code, or None if it was never created."""
        record = self.table.get(short_code)
        if record is None:
            return None

        return LinkStats(
            record=record,
            short_url=self.short_url_for(short_code),
            is_expired=record.is_expired(self.clock()),
            clicks_by_hour=clicks_by_hour(record.click_history, self.stats_tz),
            clicks_by_day=clicks_by_day(record.click_history, self.stats_tz),
        )

    async def health_check(self) -> bool:
        return await self.persistence.kv_store.health_check()

    async def close(self) -> None:
        """Close the persistence backend."""
        await self.persistence.kv_store.close()
