import asyncio
import logging
from dataclasses import dataclass
from typing import Dict, Optional

from kakao_auth.config import PROVIDER_TAG
from kakao_auth.core.errors import KakaoVerificationError, MissingSocialUserIdError
from kakao_auth.models.user import KakaoProfile, build_internal_uid
from kakao_auth.schemas.auth import KakaoTokenRequest
from kakao_auth.services.kakao_service import KakaoService
from kakao_auth.services.token_service import CustomTokenService
from kakao_auth.services.users_service import UserProfileStore

logger = logging.getLogger(__name__)


@dataclass
class ExchangeResult:
    uid: str
    custom_token: str


class TokenExchangeService:
    """
    Canjea un ID de Kakao por un custom token de Firebase y materializa
    el perfil en Firestore. Se construye una vez al arrancar el proceso.
    """

    def __init__(
        self,
        token_service: CustomTokenService,
        profile_store: UserProfileStore,
        kakao_service: Optional[KakaoService] = None,
        attach_provider_claims: bool = True,
        fail_on_persist_error: bool = True,
        verify_kakao_token: bool = False,
    ):
        if verify_kakao_token and kakao_service is None:
            raise ValueError("verify_kakao_token requiere un KakaoService")
        self.token_service = token_service
        self.profile_store = profile_store
        self.kakao_service = kakao_service
        self.attach_provider_claims = attach_provider_claims
        self.fail_on_persist_error = fail_on_persist_error
        self.verify_kakao_token = verify_kakao_token

    def provider_claims(self, social_user_id: str) -> Optional[Dict]:
        if not self.attach_provider_claims:
            return None
        return {"provider": PROVIDER_TAG, "kakaoUserId": social_user_id}

    async def _verified_profile(self, body: KakaoTokenRequest) -> KakaoProfile:
        if not body.socialAccessToken:
            raise KakaoVerificationError("Se requiere el access token de Kakao.")

        remote = await self.kakao_service.fetch_profile(body.socialAccessToken)
        if remote.social_user_id != body.socialUserId:
            raise KakaoVerificationError("El token de Kakao no corresponde al ID de usuario.")

        # lo que manda el cliente tiene prioridad; Kakao completa lo que falte
        return KakaoProfile(
            social_user_id=body.socialUserId,
            email=body.email or remote.email,
            nickname=body.nickname or remote.nickname,
        )

    async def exchange(self, body: KakaoTokenRequest) -> ExchangeResult:
        if not body.socialUserId:
            raise MissingSocialUserIdError()

        uid = build_internal_uid(body.socialUserId)

        if self.verify_kakao_token:
            profile = await self._verified_profile(body)
        else:
            profile = KakaoProfile(
                social_user_id=body.socialUserId,
                email=body.email,
                nickname=body.nickname,
            )

        custom_token = await asyncio.to_thread(
            self.token_service.mint, uid, self.provider_claims(body.socialUserId)
        )

        try:
            await asyncio.to_thread(self.profile_store.upsert_kakao_profile, profile)
        except Exception as e:
            if self.fail_on_persist_error:
                raise
            logger.warning("No se pudo guardar el perfil (continuo) uid=%s: %s", uid, e)

        logger.info("Custom token de Kakao creado uid=%s", uid)
        return ExchangeResult(uid=uid, custom_token=custom_token)
