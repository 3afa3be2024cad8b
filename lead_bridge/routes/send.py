"""
/api/send — webhook → email bridge.

POST relays the submission; any other method is a health probe answering "ok".
"""

import json
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from lead_bridge.config import Settings, get_settings
from lead_bridge.errors import BridgeError
from lead_bridge.services.dispatch import InboundRequest, relay_submission
from lead_bridge.services.mailer import MailTransport, get_transport

logger = logging.getLogger(__name__)

router = APIRouter(tags=["send"])

PROBE_METHODS = ["GET", "HEAD", "PUT", "PATCH", "DELETE", "OPTIONS"]


@router.post("")
async def send_submission(
    request: Request,
    settings: Settings = Depends(get_settings),
    transport: MailTransport = Depends(get_transport),
):
    """
    Turn a form-platform webhook into a lead email.

    - 401 on missing/wrong token, 400 on unknown kind; nothing is sent.
    - 200 with recipients and message id once the relay accepts the message.
    - 500 on any other failure. No retry; the webhook source re-delivers.
    """
    inbound = await parse_request(request)

    try:
        result = await relay_submission(inbound, settings, transport)
    except BridgeError:
        raise
    except Exception as e:
        raise BridgeError(str(e) or e.__class__.__name__) from e

    return JSONResponse(result.model_dump(mode="json", by_alias=True))


@router.api_route("", methods=PROBE_METHODS, include_in_schema=False)
async def probe():
    return PlainTextResponse("ok")


async def parse_request(request: Request) -> InboundRequest:
    """Method, query and JSON body; a missing or non-object body becomes {}."""
    raw = await request.body()
    body: dict = {}
    if raw:
        try:
            decoded = json.loads(raw)
        except (ValueError, UnicodeDecodeError):
            logger.warning("Ignoring non-JSON request body (%d bytes)", len(raw))
        else:
            if isinstance(decoded, dict):
                body = decoded

    return InboundRequest(
        method=request.method,
        query=dict(request.query_params),
        body=body,
    )
