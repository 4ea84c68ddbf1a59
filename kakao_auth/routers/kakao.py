import logging
from typing import Optional

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse

from kakao_auth.core.errors import TokenExchangeError
from kakao_auth.deps.services import get_token_exchange_service
from kakao_auth.models.user import build_internal_uid
from kakao_auth.schemas.auth import CustomTokenResponse, ErrorResponse, KakaoTokenRequest
from kakao_auth.services.token_exchange import TokenExchangeService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["kakao"])


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.options("/createKakaoCustomToken", include_in_schema=False)
def create_kakao_custom_token_preflight():
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/createKakaoCustomToken",
    response_model=CustomTokenResponse,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def create_kakao_custom_token(
    body: Optional[KakaoTokenRequest] = None,
    service: TokenExchangeService = Depends(get_token_exchange_service),
):
    """
    Canjea el ID de usuario de Kakao por un custom token de Firebase.
    UID resultante: 'kakao:{kakaoUserId}'.
    """
    body = body or KakaoTokenRequest()
    uid = build_internal_uid(body.socialUserId) if body.socialUserId else None

    try:
        result = await service.exchange(body)
    except TokenExchangeError as e:
        if e.status_code >= 500:
            logger.exception("Error creando custom token uid=%s", uid)
        else:
            logger.warning("Solicitud rechazada uid=%s: %s", uid, e.message)
        return _error(e.status_code, e.message)
    except Exception as e:
        logger.exception("Error creando custom token uid=%s", uid)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e))

    return {"customToken": result.custom_token}
