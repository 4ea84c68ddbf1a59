from fastapi import Request

from kakao_auth.services.token_exchange import TokenExchangeService


def get_token_exchange_service(request: Request) -> TokenExchangeService:
    # construido en el lifespan de la app (ver kakao_auth.main)
    return request.app.state.token_exchange
