"""
RecipeBook Backend — Firebase App Lifecycle
=============================================

What:  Lazily initializes the firebase_admin App and its async Firestore client.
How:   One App per process, created on first use from settings. Credentials come
       from a service account file when configured, otherwise from Application
       Default Credentials (Cloud Run, gcloud login, the emulators).
Who:   Used by recipebook.dependencies to build the collaborators, and by the
       application lifespan to release the App on shutdown.
"""

import logging
from typing import Optional

import firebase_admin
from firebase_admin import App, credentials, firestore_async
from google.cloud import firestore

from recipebook.config import settings

logger = logging.getLogger(__name__)

_app: Optional[App] = None
_firestore_client: Optional[firestore.AsyncClient] = None


def get_firebase_app() -> App:
    """Return the process-wide firebase_admin App, initializing it on first call."""
    global _app
    if _app is None:
        options = {}
        if settings.database_url:
            options["databaseURL"] = settings.database_url
        if settings.firebase_project_id:
            options["projectId"] = settings.firebase_project_id

        if settings.firebase_credentials_file:
            credential = credentials.Certificate(settings.firebase_credentials_file)
        else:
            credential = credentials.ApplicationDefault()

        _app = firebase_admin.initialize_app(credential, options or None)
        logger.info(
            "Firebase app initialized (project=%s)",
            settings.firebase_project_id or "<from credentials>",
        )
    return _app


def get_firestore_client() -> firestore.AsyncClient:
    """Return the process-wide async Firestore client bound to the Firebase App."""
    global _firestore_client
    if _firestore_client is None:
        _firestore_client = firestore_async.client(app=get_firebase_app())
    return _firestore_client


def is_initialized() -> bool:
    return _app is not None


def close_firebase() -> None:
    """
    What:  Releases the Firebase App and drops the cached Firestore client.
    When:  Called during application shutdown (lifespan handler).
    """
    global _app, _firestore_client
    if _app is not None:
        firebase_admin.delete_app(_app)
        logger.info("Firebase app released")
    _app = None
    _firestore_client = None
