from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


def _blank_to_none(value: Any) -> Any:
    # "" y null se tratan igual (como `valor || null`)
    if isinstance(value, str) and value == "":
        return None
    return value


class KakaoTokenRequest(BaseModel):
    """
    Body de POST /createKakaoCustomToken.
    Acepta también los nombres legados (kakaoUserId, kakaoAccessToken, ...).
    """
    model_config = ConfigDict(populate_by_name=True)

    socialUserId: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("socialUserId", "kakaoUserId")
    )
    socialAccessToken: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("socialAccessToken", "kakaoAccessToken")
    )
    email: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("email", "kakaoEmail")
    )
    nickname: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("nickname", "kakaoNickname")
    )

    @field_validator("socialUserId", mode="before")
    @classmethod
    def _coerce_user_id(cls, value: Any) -> Any:
        # los IDs de Kakao son numéricos; algunos clientes los mandan como número
        if isinstance(value, int) and not isinstance(value, bool):
            # 0 es falsy igual que "" (como `!kakaoUserId`)
            return str(value) if value else None
        return _blank_to_none(value)

    @field_validator("socialAccessToken", "email", "nickname", mode="before")
    @classmethod
    def _optional_blank(cls, value: Any) -> Any:
        return _blank_to_none(value)


class CustomTokenResponse(BaseModel):
    customToken: str


class ErrorResponse(BaseModel):
    error: str
