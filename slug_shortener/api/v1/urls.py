from fastapi import APIRouter, Depends

from slug_shortener.schemas.url import UrlCreate, UrlMappingResponse, ErrorResponse
from slug_shortener.services.slug_resolver import SlugResolver
from slug_shortener.dependencies import get_slug_resolver, enforce_create_rate_limit

router = APIRouter(tags=["urls"])


@router.post(
    "/url",
    response_model=UrlMappingResponse,
    dependencies=[Depends(enforce_create_rate_limit)],
    responses={
        400: {"model": ErrorResponse, "description": "Invalid URL or slug"},
        409: {"model": ErrorResponse, "description": "Slug is in use"},
        429: {"description": "Too many requests"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
)
async def create_short_url(
    url_data: UrlCreate,
    resolver: SlugResolver = Depends(get_slug_resolver)
):
    """Create a new short URL, with a custom slug or a generated one"""
    return await resolver.create_short_url(url_data.slug, url_data.url)
