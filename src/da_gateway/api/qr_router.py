"""Join link + QR code for the admin panel."""
import segno
from fastapi import APIRouter, Request
from starlette.concurrency import run_in_threadpool

from config.settings import settings
from src.da_common.errors import QrGenerationError
from src.da_common.response import ApiResponse, success_response
from src.da_gateway.application.qr import render_qr_data_uri

router = APIRouter(tags=["join"])


def join_url(request: Request) -> str:
    """Participant link as seen by the client, honouring a reverse proxy's scheme."""
    if settings.PUBLIC_URL:
        return settings.PUBLIC_URL
    scheme = request.headers.get("x-forwarded-proto") or request.url.scheme
    host = request.headers.get("host") or request.url.netloc
    return f"{scheme}://{host}"


@router.get("/qr")
async def join_qr(request: Request) -> ApiResponse:
    url = join_url(request)
    try:
        data_uri = await run_in_threadpool(render_qr_data_uri, url)
    except (segno.DataOverflowError, ValueError) as e:
        raise QrGenerationError() from e
    return success_response(
        {"url": url, "qr": data_uri},
        request_id=getattr(request.state, "request_id", None),
    )
