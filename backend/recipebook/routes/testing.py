"""
RecipeBook Backend — Test-Environment Route Handlers
======================================================

What:  POST /delete_users, which deletes EVERY account in the identity provider.
When:  Mounted by create_app() only when ENABLE_TEST_ENDPOINTS is set and
       APP_ENV is not "production"; otherwise the path does not exist (404).
Who:   End-to-end test suites tearing down their fixtures.
"""

from fastapi import APIRouter, Depends

from recipebook.dependencies import get_identity_provider
from recipebook.schemas.common import ErrorResponse, MessageResponse
from recipebook.services.identity_base import IdentityProvider
from recipebook.services.user_service import user_service

router = APIRouter(tags=["Testing"])


@router.post(
    "/delete_users",
    response_model=MessageResponse,
    responses={400: {"description": "Provider failure", "model": ErrorResponse}},
    summary="Delete all accounts (test environments only)",
)
async def delete_users(
    identity: IdentityProvider = Depends(get_identity_provider),
) -> MessageResponse:
    await user_service.delete_all_users(identity)
    return MessageResponse(message="All users deleted successfully")
