import logging
from typing import Any, Dict, Optional

import httpx

from kakao_auth.config import KAKAO_TIMEOUT, KAKAO_USER_INFO_URL
from kakao_auth.core.errors import KakaoVerificationError
from kakao_auth.models.user import KakaoProfile

logger = logging.getLogger(__name__)


def profile_from_user_info(data: Dict[str, Any]) -> KakaoProfile:
    """
    Normaliza la respuesta de /v2/user/me:
      { id, kakao_account: { email, profile: { nickname } }, properties: { nickname } }
    """
    account = data.get("kakao_account") or {}
    profile = account.get("profile") or {}
    properties = data.get("properties") or {}
    return KakaoProfile(
        social_user_id=str(data.get("id")),
        email=account.get("email") or None,
        nickname=profile.get("nickname") or properties.get("nickname") or None,
    )


class KakaoService:
    """Verifica access tokens de Kakao contra la API de usuario."""

    def __init__(
        self,
        user_info_url: str = KAKAO_USER_INFO_URL,
        timeout: float = KAKAO_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.user_info_url = user_info_url
        self.timeout = timeout
        self.transport = transport

    async def verify_access_token(self, access_token: str) -> Dict[str, Any]:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                r = await client.get(
                    self.user_info_url,
                    headers={"Authorization": f"Bearer {access_token}"},
                )
            except httpx.HTTPError as e:
                logger.warning("Kakao /v2/user/me no respondió: %s", e)
                raise KakaoVerificationError() from e

        if r.status_code != 200:
            logger.warning("Kakao rechazó el access token (status=%s)", r.status_code)
            raise KakaoVerificationError()
        try:
            return r.json()
        except ValueError as e:
            logger.warning("Kakao devolvió un body que no es JSON: %s", e)
            raise KakaoVerificationError() from e

    async def fetch_profile(self, access_token: str) -> KakaoProfile:
        return profile_from_user_info(await self.verify_access_token(access_token))
