"""
RecipeBook Backend — User Service (accounts and sessions)
===========================================================

What:  Business logic for signup, login, signout, session checks, user detail
       lookups and the test-only bulk account deletion.
How:   Each operation checks its required fields, performs one or two calls
       against the IdentityProvider / DocumentStore, and maps any failure onto
       the status code its endpoint has always returned.
Who:   Called by recipebook.routes.users.

Status mapping per operation (catch-all in brackets):
    signup              400 missing | 409 duplicate email | [400]
    delete_all_users    [400]
    login               400 missing | [400] (unknown email, missing user record)
    signout             400 missing | [400]
    fetch_user_details  400 missing | 404 unknown email   | [500]
    check_session       400 missing | 401 unknown session | [500]

Known limitation:
    The duplicate-email check is a query before the write, not a constraint.
    Two concurrent signups with the same email can both pass it. If the user
    record write fails after the account was created, the account is left
    behind; there is no compensation.
"""

import asyncio
import logging
from typing import Dict

from recipebook.config import settings
from recipebook.exceptions import (
    ConflictError,
    NotFoundError,
    ValidationError,
    retarget,
)
from recipebook.schemas.user import (
    CheckSessionRequest,
    LoginRequest,
    SignoutRequest,
    SignupRequest,
    UserDetailsResponse,
)
from recipebook.services.identity_base import IdentityProvider
from recipebook.services.store_base import DocumentStore

logger = logging.getLogger(__name__)


class UserService:
    """
    Stateless account/session operations.

    Collaborators are passed into every call (like a DB session per request),
    so tests can hand in in-memory fakes.
    """

    async def signup(
        self,
        identity: IdentityProvider,
        store: DocumentStore,
        request: SignupRequest,
    ) -> str:
        """
        Create an account and its user record; return the new user id.

        Raises:
            ValidationError: Missing email, password, firstName or lastName (400, "error")
            ConflictError:   A user record or account already uses the email (409)
            RecipeBookError: Any other failure, re-targeted to 400 "message"
        """
        if not (request.email and request.password and request.first_name and request.last_name):
            raise ValidationError(message="Missing required fields", body_key="error")

        users = settings.users_collection
        try:
            existing = await store.query(users, "email", request.email, limit=1)
            if existing:
                raise ConflictError()

            uid = await identity.create_account(
                email=request.email,
                password=request.password,
                display_name=f"{request.first_name} {request.last_name}",
            )

            await store.set(
                users,
                uid,
                {
                    "email": request.email,
                    "firstName": request.first_name,
                    "lastName": request.last_name,
                    "favorite_recipes": [],
                    "created_recipes": [],
                },
            )
        except ConflictError:
            logger.warning("Signup rejected: email already registered")
            raise
        except Exception as e:
            logger.error("Error creating user: %s", e)
            raise retarget(e, 400) from e

        logger.info("User %s signed up", uid)
        return uid

    async def delete_all_users(self, identity: IdentityProvider) -> int:
        """
        Delete EVERY account known to the identity provider.

        Only reachable when test endpoints are enabled outside production.
        User records in the document store are left untouched.

        Returns:
            Number of accounts deleted
        """
        try:
            uids = await identity.list_all_accounts()
            results = await asyncio.gather(
                *(identity.delete_account(uid) for uid in uids), return_exceptions=True
            )
            failures = [r for r in results if isinstance(r, Exception)]
            if failures:
                logger.error("%d of %d account deletions failed", len(failures), len(uids))
                raise failures[0]
        except Exception as e:
            logger.error("Bulk account deletion failed: %s", e)
            raise retarget(e, 400) from e

        logger.warning("Deleted %d accounts via test endpoint", len(uids))
        return len(uids)

    async def login(
        self,
        identity: IdentityProvider,
        store: DocumentStore,
        request: LoginRequest,
    ) -> str:
        """Store the client's token as the user's session_id; return the user id."""
        if not request.email or not request.token_id:
            raise ValidationError(message="Email and token_id are required")

        try:
            uid = await identity.get_account_by_email(request.email)
            await store.update(settings.users_collection, uid, {"session_id": request.token_id})
        except Exception as e:
            logger.warning("Login failed: %s", e)
            raise retarget(e, 400) from e

        logger.info("User %s logged in", uid)
        return uid

    async def signout(
        self,
        identity: IdentityProvider,
        store: DocumentStore,
        request: SignoutRequest,
    ) -> str:
        """Clear the session_id of the user record owning `email`; return its id."""
        if not request.email:
            raise ValidationError(message="Email is required")

        users = settings.users_collection
        try:
            # Confirms the account still exists before touching the record
            await identity.get_account_by_email(request.email)
            matches = await store.query(users, "email", request.email, limit=1)
            if not matches:
                raise NotFoundError(resource="user", message="User not found")
            user_id = matches[0].key
            await store.update(users, user_id, {"session_id": ""})
        except Exception as e:
            logger.warning("Signout failed: %s", e)
            raise retarget(e, 400) from e

        logger.info("User %s logged out", user_id)
        return user_id

    async def fetch_user_details(self, store: DocumentStore, email: str) -> UserDetailsResponse:
        """
        Look up the user record by email.

        Raises:
            ValidationError: email missing (400)
            NotFoundError:   no record with that email (404)
            RecipeBookError: store failure, re-targeted to 500
        """
        if not email:
            raise ValidationError(message="Email is required")

        try:
            matches = await store.query(settings.users_collection, "email", email, limit=1)
        except Exception as e:
            logger.error("Error fetching user details: %s", e)
            raise retarget(e, 500) from e

        if not matches:
            raise NotFoundError(resource="user", message="User not found")

        user: Dict = matches[0].data
        return UserDetailsResponse(
            first_name=user.get("firstName"),
            last_name=user.get("lastName"),
            email=user.get("email"),
            favorite_recipes=user.get("favorite_recipes") or [],
            created_recipes=user.get("created_recipes") or [],
        )

    async def check_session(self, store: DocumentStore, request: CheckSessionRequest) -> str:
        """
        Resolve a session id to the user id holding it.

        An empty session id never matches: signout stores "" and presence is
        checked first.

        Raises:
            ValidationError: sessionId missing (400)
            NotFoundError:   no user holds this session (re-targeted to 401)
            RecipeBookError: store failure, re-targeted to 500
        """
        if not request.session_id:
            raise ValidationError(message="Session ID is missing or undefined")

        try:
            matches = await store.query(
                settings.users_collection, "session_id", request.session_id, limit=1
            )
        except Exception as e:
            logger.error("Error checking session: %s", e)
            raise retarget(e, 500) from e

        if not matches:
            raise NotFoundError(resource="session", message="Invalid session", status_code=401)
        return matches[0].key


# Stateless, shared across requests
user_service = UserService()
