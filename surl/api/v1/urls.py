from typing import Optional

from fastapi import APIRouter, Depends, Form, Request

from surl.dependencies import get_mapping_service
from surl.schemas.url import ShortURLResponse
from surl.services.mapping_service import MappingService

router = APIRouter(tags=["urls"])


@router.post("/new", response_model=ShortURLResponse)
async def create_short_url(
    request: Request,
    url: Optional[str] = Form(None),
    mapping_service: MappingService = Depends(get_mapping_service)
):
    """
    Shorten a URL submitted as form field `url`.

    A missing or empty field raises ValidationError (400, see main.py).
    """
    identifier = await mapping_service.create(url)
    return ShortURLResponse(url=f"{request.app.state.website}{identifier}")
