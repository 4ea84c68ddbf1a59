import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_str(name: str) -> Optional[str]:
    val = (os.getenv(name) or "").strip()
    return val or None


# Firebase Admin
FIREBASE_CREDENTIALS = _env_str("FIREBASE_CREDENTIALS")  # ruta al JSON de la service account
FIREBASE_PROJECT_ID = _env_str("FIREBASE_PROJECT_ID")
FIREBASE_SERVICE_ACCOUNT_ID = _env_str("FIREBASE_SERVICE_ACCOUNT_ID")

# Firestore
USERS_COLLECTION = os.getenv("USERS_COLLECTION", "users")

# Namespace prefix of internal uids: "kakao:{kakaoUserId}"
PROVIDER_TAG = "kakao"

# Exchange policy
ATTACH_PROVIDER_CLAIMS = _env_bool("ATTACH_PROVIDER_CLAIMS", True)
FAIL_ON_PERSIST_ERROR = _env_bool("FAIL_ON_PERSIST_ERROR", True)
VERIFY_KAKAO_TOKEN = _env_bool("VERIFY_KAKAO_TOKEN", False)

# Kakao
KAKAO_USER_INFO_URL = os.getenv("KAKAO_USER_INFO_URL", "https://kapi.kakao.com/v2/user/me")
KAKAO_TIMEOUT = float(os.getenv("KAKAO_TIMEOUT", "10"))

# CORS
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*")
ALLOWED_METHODS = "GET, POST, OPTIONS"
ALLOWED_HEADERS = "Content-Type"
