"""
RecipeBook Backend — Account & Session Route Handlers
=======================================================

What:  POST /signup, /login, /signout, /check-session and GET /fetch-user-details.
How:   Parse the body, hand it to UserService with the injected collaborators,
       wrap the result. Failures surface as RecipeBook exceptions and are
       rendered by the global handlers in main.py.
Who:   Called by the web and mobile clients during sign-up / sign-in flows.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from recipebook.dependencies import get_document_store, get_identity_provider
from recipebook.schemas.common import ErrorResponse
from recipebook.schemas.user import (
    CheckSessionRequest,
    LoginRequest,
    SignoutRequest,
    SignupRequest,
    UserDetailsResponse,
    UserIdResponse,
)
from recipebook.services.identity_base import IdentityProvider
from recipebook.services.store_base import DocumentStore
from recipebook.services.user_service import user_service

router = APIRouter(tags=["Users"])


@router.post(
    "/signup",
    response_model=UserIdResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Missing fields or provider rejection", "model": ErrorResponse},
        409: {"description": "Email already registered", "model": ErrorResponse},
    },
    summary="Create an account and its user record",
)
async def signup(
    body: Optional[SignupRequest] = None,
    identity: IdentityProvider = Depends(get_identity_provider),
    store: DocumentStore = Depends(get_document_store),
) -> UserIdResponse:
    uid = await user_service.signup(identity, store, body or SignupRequest())
    return UserIdResponse(message="User created successfully", user_id=uid)


@router.post(
    "/login",
    response_model=UserIdResponse,
    responses={400: {"description": "Unknown email or write failure", "model": ErrorResponse}},
    summary="Record the client's session token on the user record",
)
async def login(
    body: Optional[LoginRequest] = None,
    identity: IdentityProvider = Depends(get_identity_provider),
    store: DocumentStore = Depends(get_document_store),
) -> UserIdResponse:
    """
    Authentication itself happens client-side against the identity provider;
    this endpoint only binds the resulting token to the user as `session_id`.
    """
    uid = await user_service.login(identity, store, body or LoginRequest())
    return UserIdResponse(message="User logged in", user_id=uid)


@router.post(
    "/signout",
    response_model=UserIdResponse,
    responses={400: {"description": "Any failure", "model": ErrorResponse}},
    summary="Clear the user's session",
)
async def signout(
    body: Optional[SignoutRequest] = None,
    identity: IdentityProvider = Depends(get_identity_provider),
    store: DocumentStore = Depends(get_document_store),
) -> UserIdResponse:
    user_id = await user_service.signout(identity, store, body or SignoutRequest())
    return UserIdResponse(message="User logged out", user_id=user_id)


@router.get(
    "/fetch-user-details",
    response_model=UserDetailsResponse,
    responses={
        400: {"description": "Email missing", "model": ErrorResponse},
        404: {"description": "User not found", "model": ErrorResponse},
        500: {"description": "Store failure", "model": ErrorResponse},
    },
    summary="Profile, favorites and created recipes for an email",
)
async def fetch_user_details(
    email: Optional[str] = Query(default=None, description="Email of the user to look up"),
    store: DocumentStore = Depends(get_document_store),
) -> UserDetailsResponse:
    return await user_service.fetch_user_details(store, email)


@router.post(
    "/check-session",
    response_model=UserIdResponse,
    responses={
        400: {"description": "sessionId missing", "model": ErrorResponse},
        401: {"description": "No user holds this session", "model": ErrorResponse},
        500: {"description": "Store failure", "model": ErrorResponse},
    },
    summary="Resolve a session id to its user",
)
async def check_session(
    body: Optional[CheckSessionRequest] = None,
    store: DocumentStore = Depends(get_document_store),
) -> UserIdResponse:
    user_id = await user_service.check_session(store, body or CheckSessionRequest())
    return UserIdResponse(message="Session valid", user_id=user_id)
