import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse

from slug_shortener.api.errors import not_found_response
from slug_shortener.dependencies import get_slug_resolver
from slug_shortener.services.slug_resolver import SlugResolver
from slug_shortener.storage.exceptions import StorageUnavailableError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["redirect"])


@router.get("/{slug}", include_in_schema=False)
async def redirect_to_url(
    slug: str,
    resolver: SlugResolver = Depends(get_slug_resolver)
):
    """
    Redirect to the mapped URL.

    Absent slugs, malformed slugs and store failures all get the same
    not-found page; callers cannot tell them apart.
    """
    try:
        url = await resolver.resolve_slug(slug)
    except StorageUnavailableError as e:
        logger.error("Lookup for %r failed: %s", slug, e)
        url = None

    if not url:
        return not_found_response()

    return RedirectResponse(url=url, status_code=status.HTTP_302_FOUND)
