from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import RedirectResponse

from surl.dependencies import get_mapping_service
from surl.services.mapping_service import MappingService

router = APIRouter(tags=["redirect"])


def raw_request_path(request: Request) -> str:
    """Request path exactly as received, without percent-decoding"""
    raw_path = request.scope.get("raw_path")
    if not raw_path:
        return request.url.path
    return raw_path.split(b"?", 1)[0].decode("latin-1")


@router.get("/{path:path}")
async def redirect_to_long_url(
    request: Request,
    mapping_service: MappingService = Depends(get_mapping_service)
):
    """
    Redirect to the original URL.

    The whole raw request path ("/0", "/a1", ...) is the identifier, so
    "/%30" does not resolve to "/0".
    Unknown identifiers get an empty 200, not an error page.
    """
    long_url = await mapping_service.resolve(raw_request_path(request))

    if long_url is None:
        return Response(status_code=status.HTTP_200_OK)

    return RedirectResponse(url=long_url, status_code=status.HTTP_301_MOVED_PERMANENTLY)


@router.head("/{path:path}")
async def head_any(path: str):
    return Response(status_code=status.HTTP_200_OK)
