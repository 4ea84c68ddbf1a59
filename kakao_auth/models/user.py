from typing import Optional
from pydantic import BaseModel

from kakao_auth.config import PROVIDER_TAG


def build_internal_uid(social_user_id: str) -> str:
    # misma cuenta de Kakao -> mismo uid de Firebase, siempre
    return f"{PROVIDER_TAG}:{social_user_id}"


class KakaoProfile(BaseModel):
    social_user_id: str
    email: Optional[str] = None
    nickname: Optional[str] = None

    @property
    def uid(self) -> str:
        return build_internal_uid(self.social_user_id)

    @property
    def provider(self) -> str:
        return PROVIDER_TAG

    def to_document(self) -> dict:
        """Campos del doc en `users`. Los opcionales se guardan como None explícito."""
        return {
            "socialUserId": self.social_user_id,
            "email": self.email,
            "nickname": self.nickname,
            "provider": self.provider,
        }
