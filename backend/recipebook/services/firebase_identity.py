"""
RecipeBook Backend — Firebase Authentication Identity Provider
================================================================

What:  IdentityProvider implementation backed by the Firebase Admin SDK.
How:   firebase_admin.auth is synchronous (blocking HTTP under the hood), so
       each call is pushed to a worker thread with asyncio.to_thread to keep
       the event loop free. Provider exceptions are translated into the
       RecipeBook hierarchy at this boundary; nothing above it sees a
       firebase_admin type.
Who:   Built once per process by recipebook.dependencies.

Error translation:
    EmailAlreadyExistsError            → ConflictError (409)
    UserNotFoundError                  → NotFoundError (404)
    InvalidIdTokenError (+ subclasses) → AuthenticationError (401)
    ValueError on bad token input      → AuthenticationError (401)
    FirebaseError (anything else)      → IdentityProviderError (400)
"""

import asyncio
import logging
from typing import List, Optional

from firebase_admin import App, auth
from firebase_admin.exceptions import FirebaseError

from recipebook.exceptions import (
    AuthenticationError,
    ConflictError,
    IdentityProviderError,
    NotFoundError,
)
from recipebook.services.identity_base import IdentityProvider

logger = logging.getLogger(__name__)


class FirebaseIdentityProvider(IdentityProvider):
    """
    Firebase Authentication adapter.

    Args:
        app: The initialized firebase_admin App (None → the default app)
    """

    def __init__(self, app: Optional[App] = None):
        self._app = app

    async def create_account(self, email: str, password: str, display_name: str) -> str:
        try:
            record = await asyncio.to_thread(
                auth.create_user,
                email=email,
                password=password,
                display_name=display_name,
                app=self._app,
            )
        except auth.EmailAlreadyExistsError as e:
            raise ConflictError(context={"provider_code": e.code}) from e
        except (FirebaseError, ValueError) as e:
            logger.warning("Firebase rejected account creation: %s", e)
            raise IdentityProviderError(message=str(e)) from e
        logger.info("Created account %s", record.uid)
        return record.uid

    async def verify_token(self, token: str) -> str:
        try:
            decoded = await asyncio.to_thread(auth.verify_id_token, token, app=self._app)
        except (auth.InvalidIdTokenError, ValueError) as e:
            raise AuthenticationError(message="Invalid token", details=str(e)) from e
        except FirebaseError as e:
            # Certificate fetch failures and the like: still an auth failure to the caller
            logger.error("Token verification failed upstream: %s", e)
            raise AuthenticationError(message="Invalid token", details=str(e)) from e
        return decoded["uid"]

    async def get_account_by_email(self, email: str) -> str:
        try:
            record = await asyncio.to_thread(auth.get_user_by_email, email, app=self._app)
        except auth.UserNotFoundError as e:
            raise NotFoundError(
                resource="account",
                message=f"No user record found for the provided email: {email}",
            ) from e
        except (FirebaseError, ValueError) as e:
            raise IdentityProviderError(message=str(e)) from e
        return record.uid

    async def list_all_accounts(self) -> List[str]:
        def _collect() -> List[str]:
            page = auth.list_users(app=self._app)
            return [user.uid for user in page.iterate_all()]

        try:
            return await asyncio.to_thread(_collect)
        except FirebaseError as e:
            raise IdentityProviderError(message=str(e)) from e

    async def delete_account(self, uid: str) -> None:
        try:
            await asyncio.to_thread(auth.delete_user, uid, app=self._app)
        except auth.UserNotFoundError as e:
            raise NotFoundError(resource="account", resource_id=uid) from e
        except (FirebaseError, ValueError) as e:
            raise IdentityProviderError(message=str(e)) from e
