"""
TOTP API Routes

Generates the current lockbox code for a shared secret.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Query, Request

from ..errors import ValidationError
from ..models.totp import TotpRequest, TotpResponse
from ..totp import code_window, generate_totp

logger = logging.getLogger(__name__)

router = APIRouter()

SECRET_EXAMPLE = '?secretKey=JBSWY3DPEHPK3PXP&boxId=box001'


def build_code_response(request: Request, data: TotpRequest) -> TotpResponse:
    """
    Generate a code and describe its validity window.

    Raises:
        ValidationError: If the secret is missing
        ComputationError: If code generation fails
    """
    if not data.secret_key:
        raise ValidationError(
            "Missing secretKey parameter",
            details={'example': f"Add {SECRET_EXAMPLE} to the URL"}
        )

    settings = request.app.state.settings
    window = code_window(data.timestamp, step=settings.totp_step_seconds)
    code = generate_totp(
        data.secret_key,
        window.timestamp,
        step=settings.totp_step_seconds,
        digits=settings.totp_digits
    )

    box_id = data.box_id or 'unknown'
    logger.info(f"Generated code for box {box_id} (step {window.counter})")

    return TotpResponse(
        success=True,
        box_id=box_id,
        totp_code=code,
        time_remaining=window.seconds_remaining,
        valid_until=window.valid_until,
        timestamp=window.timestamp,
        message=f"TOTP code {code} is valid for {window.seconds_remaining} more seconds"
    )


@router.get("/generate-totp", response_model=TotpResponse)
async def generate_code_get(
    request: Request,
    secret_key: Optional[str] = Query(None, alias="secretKey"),
    box_id: Optional[str] = Query(None, alias="boxId"),
    timestamp: Optional[int] = None
):
    """Generate a code from query parameters."""
    data = TotpRequest(secret_key=secret_key, box_id=box_id, timestamp=timestamp)
    return build_code_response(request, data)


@router.post("/generate-totp", response_model=TotpResponse)
async def generate_code_post(request: Request, data: TotpRequest):
    """Generate a code from a JSON body."""
    return build_code_response(request, data)
