import logging
from typing import Dict

import firebase_admin
from firebase_admin import credentials
from firebase_admin import firestore as fb_firestore
from google.cloud import firestore

from kakao_auth.config import (
    FIREBASE_CREDENTIALS, FIREBASE_PROJECT_ID, FIREBASE_SERVICE_ACCOUNT_ID
)

logger = logging.getLogger(__name__)


def init_firebase_app() -> firebase_admin.App:
    """
    Inicializa (una vez por proceso) la app por defecto de Firebase Admin.
    Sin FIREBASE_CREDENTIALS se usan las Application Default Credentials.
    """
    try:
        return firebase_admin.get_app()
    except ValueError:
        pass

    if FIREBASE_CREDENTIALS:
        cred = credentials.Certificate(FIREBASE_CREDENTIALS)
    else:
        cred = credentials.ApplicationDefault()

    options: Dict[str, str] = {}
    if FIREBASE_PROJECT_ID:
        options["projectId"] = FIREBASE_PROJECT_ID
    # necesario para firmar custom tokens vía IAM cuando no hay clave privada
    if FIREBASE_SERVICE_ACCOUNT_ID:
        options["serviceAccountId"] = FIREBASE_SERVICE_ACCOUNT_ID

    app = firebase_admin.initialize_app(cred, options or None)
    logger.info("Firebase Admin inicializado (project=%s)", app.project_id)
    return app


def get_firestore_client(app: firebase_admin.App) -> firestore.Client:
    return fb_firestore.client(app)
