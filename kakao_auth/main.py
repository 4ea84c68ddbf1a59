import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from kakao_auth.config import (
    ALLOWED_HEADERS, ALLOWED_METHODS, ALLOWED_ORIGINS,
    ATTACH_PROVIDER_CLAIMS, FAIL_ON_PERSIST_ERROR, USERS_COLLECTION, VERIFY_KAKAO_TOKEN
)
from kakao_auth.core.firebase import get_firestore_client, init_firebase_app
from kakao_auth.core.logging import setup_logging
from kakao_auth.routers import kakao as kakao_router
from kakao_auth.services.kakao_service import KakaoService
from kakao_auth.services.token_exchange import TokenExchangeService
from kakao_auth.services.token_service import CustomTokenService
from kakao_auth.services.users_service import UserProfileStore

setup_logging()
logger = logging.getLogger(__name__)


def build_token_exchange_service() -> TokenExchangeService:
    firebase_app = init_firebase_app()
    return TokenExchangeService(
        token_service=CustomTokenService(firebase_app),
        profile_store=UserProfileStore(get_firestore_client(firebase_app), USERS_COLLECTION),
        kakao_service=KakaoService(),
        attach_provider_claims=ATTACH_PROVIDER_CLAIMS,
        fail_on_persist_error=FAIL_ON_PERSIST_ERROR,
        verify_kakao_token=VERIFY_KAKAO_TOKEN,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.token_exchange = build_token_exchange_service()
    if not VERIFY_KAKAO_TOKEN:
        logger.warning(
            "VERIFY_KAKAO_TOKEN desactivado: se emiten custom tokens sin validar "
            "el access token de Kakao"
        )
    yield


app = FastAPI(title="Kakao + FastAPI + Firebase", version="1.0.0", lifespan=lifespan)


# CORS abierto en todas las respuestas; el preflight lo responde el router (204)
@app.middleware("http")
async def cors_headers(request: Request, call_next):
    response = await call_next(request)
    response.headers["Access-Control-Allow-Origin"] = ALLOWED_ORIGINS
    response.headers["Access-Control-Allow-Methods"] = ALLOWED_METHODS
    response.headers["Access-Control-Allow-Headers"] = ALLOWED_HEADERS
    return response


@app.exception_handler(RequestValidationError)
async def invalid_body_handler(request: Request, exc: RequestValidationError):
    logger.warning("Body inválido en %s: %s", request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"error": "Cuerpo de la solicitud inválido."})


app.include_router(kakao_router.router)


@app.get("/health")
def health():
    return {"ok": True}
