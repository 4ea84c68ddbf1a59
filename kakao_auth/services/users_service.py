from typing import Dict

from google.api_core.exceptions import AlreadyExists
from google.cloud import firestore

from kakao_auth.config import USERS_COLLECTION
from kakao_auth.models.user import KakaoProfile


class UserProfileStore:
    def __init__(self, db: firestore.Client, collection: str = USERS_COLLECTION):
        self.db = db
        self.collection = collection

    def upsert_kakao_profile(self, profile: KakaoProfile) -> Dict:
        """
        Crea o mergea el doc `users/{uid}`.
        `createdAt` solo se escribe si el doc no existe; `updatedAt` siempre.
        Los campos que no se mandan no se tocan (merge).
        """
        ref = self.db.collection(self.collection).document(profile.uid)

        payload = {
            **profile.to_document(),
            "updatedAt": firestore.SERVER_TIMESTAMP,
        }

        # create() falla de forma atómica si el doc ya existe (dos primeros logins a la vez)
        try:
            ref.create({**payload, "createdAt": firestore.SERVER_TIMESTAMP})
            return {**payload, "createdAt": firestore.SERVER_TIMESTAMP}
        except AlreadyExists:
            pass

        ref.set(payload, merge=True)
        return payload
