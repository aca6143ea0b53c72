"""
RecipeBook Backend — FastAPI Dependencies
===========================================

What:  Dependency providers for the two collaborators and for the caller's
       authenticated identity.
How:   Collaborators are process-wide singletons built on first use. Tests
       replace them through `app.dependency_overrides`.

Authentication:
    `get_auth_context` reads `Authorization: Bearer <token>`, verifies it with
    the IdentityProvider and returns an immutable AuthContext. Handlers receive
    it as an argument. The only thing written to the request is
    `request.state.auth_uid`, read by the access logger.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from recipebook.config import settings
from recipebook.exceptions import AuthenticationError
from recipebook.firebase import get_firebase_app, get_firestore_client
from recipebook.services.identity_base import IdentityProvider
from recipebook.services.store_base import DocumentRef, DocumentStore

logger = logging.getLogger(__name__)

_identity_provider: Optional[IdentityProvider] = None
_document_store: Optional[DocumentStore] = None


def get_identity_provider() -> IdentityProvider:
    global _identity_provider
    if _identity_provider is None:
        from recipebook.services.firebase_identity import FirebaseIdentityProvider

        _identity_provider = FirebaseIdentityProvider(app=get_firebase_app())
    return _identity_provider


def get_document_store() -> DocumentStore:
    global _document_store
    if _document_store is None:
        from recipebook.services.firestore_store import FirestoreDocumentStore

        _document_store = FirestoreDocumentStore(client=get_firestore_client())
    return _document_store


def reset_collaborators() -> None:
    """Drop cached collaborators (called on shutdown, after the Firebase App is released)."""
    global _identity_provider, _document_store
    _identity_provider = None
    _document_store = None


@dataclass(frozen=True)
class AuthContext:
    """The authenticated caller: provider subject id + handle to their user record."""

    uid: str
    user_ref: DocumentRef


# auto_error=False: a missing or non-Bearer header reaches us as None so we can
# answer with our own 401 body instead of FastAPI's 403
bearer_scheme = HTTPBearer(auto_error=False)


async def get_auth_context(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    identity: IdentityProvider = Depends(get_identity_provider),
    store: DocumentStore = Depends(get_document_store),
) -> AuthContext:
    """
    Verify the bearer token and build the caller's AuthContext.

    Raises:
        AuthenticationError: "Missing or invalid token" when the header is absent
            or not a Bearer credential; "Invalid token" (+ details) when the
            provider rejects it.
    """
    if credentials is None or credentials.scheme.lower() != "bearer" or not credentials.credentials:
        raise AuthenticationError(message="Missing or invalid token")

    uid = await identity.verify_token(credentials.credentials)
    request.state.auth_uid = uid
    return AuthContext(
        uid=uid,
        user_ref=store.reference(settings.users_collection, uid),
    )
