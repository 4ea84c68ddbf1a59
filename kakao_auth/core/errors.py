from fastapi import status


class TokenExchangeError(Exception):
    """Error de dominio que el router convierte en {"error": message}."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingSocialUserIdError(TokenExchangeError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = "Se requiere el ID de usuario de Kakao."):
        super().__init__(message)


class KakaoVerificationError(TokenExchangeError):
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Falló la verificación del token de Kakao."):
        super().__init__(message)
