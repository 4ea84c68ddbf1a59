"""Fixtures compartidos: fakes de Firebase y TestClient con overrides."""
import itertools
from typing import Dict, List, Optional, Tuple

import pytest
from fastapi.testclient import TestClient

from kakao_auth.deps.services import get_token_exchange_service
from kakao_auth.main import app
from kakao_auth.models.user import KakaoProfile
from kakao_auth.services.token_exchange import TokenExchangeService


class FakeTokenService:
    def __init__(self, error: Optional[Exception] = None):
        self.error = error
        self.calls: List[Tuple[str, Optional[Dict]]] = []

    def mint(self, uid: str, claims: Optional[Dict] = None) -> str:
        self.calls.append((uid, claims))
        if self.error:
            raise self.error
        return f"signed-token-for-{uid}"


class FakeProfileStore:
    """Imita set(merge=True) de Firestore con timestamps crecientes."""

    def __init__(self, error: Optional[Exception] = None):
        self.error = error
        self.docs: Dict[str, Dict] = {}
        self.writes: List[Dict] = []
        self._clock = itertools.count(1)

    def upsert_kakao_profile(self, profile: KakaoProfile) -> Dict:
        if self.error:
            raise self.error
        now = next(self._clock)
        payload = {**profile.to_document(), "updatedAt": now}
        if profile.uid not in self.docs:
            payload["createdAt"] = now
            self.docs[profile.uid] = {}
        self.writes.append(payload)
        self.docs[profile.uid].update(payload)
        return self.docs[profile.uid]


@pytest.fixture
def token_service():
    return FakeTokenService()


@pytest.fixture
def profile_store():
    return FakeProfileStore()


@pytest.fixture
def exchange_service(token_service, profile_store):
    return TokenExchangeService(token_service=token_service, profile_store=profile_store)


@pytest.fixture
def client(exchange_service):
    app.dependency_overrides[get_token_exchange_service] = lambda: exchange_service
    yield TestClient(app)
    app.dependency_overrides.clear()
