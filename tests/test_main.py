"""Arranque de la app: wiring de servicios y lifespan."""
import logging
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

import kakao_auth.main as main
from kakao_auth.services.kakao_service import KakaoService
from kakao_auth.services.token_exchange import TokenExchangeService
from kakao_auth.services.token_service import CustomTokenService
from kakao_auth.services.users_service import UserProfileStore


@pytest.fixture
def firebase(monkeypatch):
    firebase_app = MagicMock(name="firebase_app")
    db = MagicMock(name="firestore_db")
    monkeypatch.setattr(main, "init_firebase_app", lambda: firebase_app)
    monkeypatch.setattr(main, "get_firestore_client", lambda app: db)
    return firebase_app, db


def test_build_service_wires_clients_and_defaults(firebase):
    firebase_app, db = firebase

    service = main.build_token_exchange_service()

    assert isinstance(service, TokenExchangeService)
    assert isinstance(service.token_service, CustomTokenService)
    assert service.token_service.app is firebase_app
    assert isinstance(service.profile_store, UserProfileStore)
    assert service.profile_store.db is db
    assert service.profile_store.collection == "users"
    assert isinstance(service.kakao_service, KakaoService)
    assert service.attach_provider_claims is True
    assert service.fail_on_persist_error is True
    assert service.verify_kakao_token is False


def test_build_service_uses_configured_flags(firebase, monkeypatch):
    monkeypatch.setattr(main, "ATTACH_PROVIDER_CLAIMS", False)
    monkeypatch.setattr(main, "FAIL_ON_PERSIST_ERROR", False)
    monkeypatch.setattr(main, "VERIFY_KAKAO_TOKEN", True)

    service = main.build_token_exchange_service()

    assert service.attach_provider_claims is False
    assert service.fail_on_persist_error is False
    assert service.verify_kakao_token is True


def test_lifespan_warns_when_verification_is_off(firebase, monkeypatch, caplog):
    monkeypatch.setattr(main, "VERIFY_KAKAO_TOKEN", False)

    with caplog.at_level(logging.WARNING, logger="kakao_auth.main"):
        with TestClient(main.app):
            assert isinstance(main.app.state.token_exchange, TokenExchangeService)

    assert any("VERIFY_KAKAO_TOKEN desactivado" in r.getMessage() for r in caplog.records)


def test_lifespan_is_quiet_when_verification_is_on(firebase, monkeypatch, caplog):
    monkeypatch.setattr(main, "VERIFY_KAKAO_TOKEN", True)

    with caplog.at_level(logging.WARNING, logger="kakao_auth.main"):
        with TestClient(main.app):
            assert main.app.state.token_exchange.verify_kakao_token is True

    assert not any("VERIFY_KAKAO_TOKEN" in r.getMessage() for r in caplog.records)
