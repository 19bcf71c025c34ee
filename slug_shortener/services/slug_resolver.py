import logging
from typing import Callable, Optional

from slug_shortener.cache.strategies import CacheStrategy
from slug_shortener.config import Settings
from slug_shortener.exceptions import SlugGenerationError, SlugInUseError
from slug_shortener.models.url import UrlMapping
from slug_shortener.services.slug_generator import generate_slug
from slug_shortener.storage.exceptions import DuplicateSlugError
from slug_shortener.storage.strategies import SlugStore
from slug_shortener.utils.validators import validate_slug, validate_url

logger = logging.getLogger(__name__)


class SlugResolver:
    """
    Creates and resolves slug mappings.

    Dependencies are injected (not created internally):
    - store: the only owner of persisted mappings
    - cache: optional read-through cache for redirects
    - slug_generator: ``(length) -> str``, swappable in tests

    No locking happens here. When two requests race for the same slug, the
    store's uniqueness constraint decides and the loser gets SlugInUseError.
    """

    def __init__(
        self,
        store: SlugStore,
        settings: Settings,
        cache: Optional[CacheStrategy] = None,
        slug_generator: Callable[[int], str] = generate_slug,
    ):
        """
        Initialize resolver with dependencies.

        Args:
            store: Slug store
            settings: Slug rules and retry limits
            cache: Cache strategy (optional, for redirect performance)
            slug_generator: Random slug source
        """
        self.store = store
        self.settings = settings
        self.cache = cache
        self.slug_generator = slug_generator

    async def create_short_url(self, requested_slug: Optional[str], target_url: Optional[str]) -> UrlMapping:
        """Create a mapping for ``target_url``.

        Process:
        1. Validate and trim the URL (InvalidUrlError)
        2. Validate and trim the slug if one was given (InvalidSlugError)
        3. Insert with the given slug, or with random slugs until one fits
        4. Cache the mapping so the creator's first redirect is a hit

        Raises:
            InvalidUrlError, InvalidSlugError, SlugInUseError,
            SlugGenerationError, StorageUnavailableError
        """
        url = validate_url(target_url, add_default_scheme=self.settings.normalize_schemeless_urls)

        if requested_slug is not None:
            slug = validate_slug(
                requested_slug,
                min_length=self.settings.slug_min_length,
                max_length=self.settings.slug_max_length,
            )
            mapping = self._insert_requested(slug, url)
        else:
            mapping = self._insert_generated(url)

        logger.info("Created mapping %s -> %s", mapping.slug, mapping.url)

        if self.cache:
            await self.cache.set(self._cache_key(mapping.slug), mapping.url, ttl=self.settings.cache_ttl)

        return mapping

    async def resolve_slug(self, slug: str) -> Optional[str]:
        """
        Get the target URL for a slug using Cache-Aside pattern.

        No validation: a malformed slug is simply not found.

        Flow:
        1. Check cache first
        2. If cache miss, query the store
        3. Populate cache for next time
        """
        cache_key = self._cache_key(slug)

        if self.cache:
            cached_url = await self.cache.get(cache_key)
            if cached_url:
                return cached_url

        mapping = self.store.find(slug)
        if mapping is None:
            return None

        if self.cache:
            await self.cache.set(cache_key, mapping.url, ttl=self.settings.cache_ttl)

        return mapping.url

    def _insert_requested(self, slug: str, url: str) -> UrlMapping:
        # Fast path for a clear error; the insert below is what actually decides
        if self.store.find(slug) is not None:
            raise SlugInUseError(slug)

        try:
            return self.store.insert(UrlMapping(slug=slug, url=url))
        except DuplicateSlugError:
            logger.info("Lost insert race for slug %s", slug)
            raise SlugInUseError(slug)

    def _insert_generated(self, url: str) -> UrlMapping:
        attempts = self.settings.max_retries
        for attempt in range(1, attempts + 1):
            slug = self.slug_generator(self.settings.generated_slug_length)
            try:
                return self.store.insert(UrlMapping(slug=slug, url=url))
            except DuplicateSlugError:
                logger.warning(
                    "Generated slug %s collided (attempt %d/%d)", slug, attempt, attempts
                )

        raise SlugGenerationError(attempts)

    @staticmethod
    def _cache_key(slug: str) -> str:
        return f"slug:{slug}"
