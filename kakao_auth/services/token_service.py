from typing import Dict, Optional

import firebase_admin
from firebase_admin import auth as fb_auth


class CustomTokenService:
    """Firma custom tokens de Firebase para un uid."""

    def __init__(self, app: Optional[firebase_admin.App] = None):
        self.app = app

    def mint(self, uid: str, claims: Optional[Dict] = None) -> str:
        token = fb_auth.create_custom_token(uid, claims, app=self.app)
        # firebase_admin devuelve bytes
        if isinstance(token, bytes):
            return token.decode("utf-8")
        return token
