"""
RecipeBook Backend — Recipe Creation Route Handler
====================================================

What:  POST /add_recipe, the only endpoint that requires a bearer token.
How:   `get_auth_context` verifies the token before the handler runs and hands
       over an immutable AuthContext; a missing or rejected token ends the
       request with 401 and no recipe is written.
"""

from typing import Optional

from fastapi import APIRouter, Depends, status

from recipebook.dependencies import AuthContext, get_auth_context, get_document_store
from recipebook.schemas.common import ErrorResponse
from recipebook.schemas.recipe import AddRecipeRequest, RecipeCreatedResponse
from recipebook.services.recipe_service import recipe_service
from recipebook.services.store_base import DocumentStore

router = APIRouter(tags=["Recipes"])


@router.post(
    "/add_recipe",
    response_model=RecipeCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Missing required fields", "model": ErrorResponse},
        401: {"description": "Missing or invalid bearer token", "model": ErrorResponse},
        500: {"description": "Store failure", "model": ErrorResponse},
    },
    summary="Create a recipe owned by the caller",
)
async def add_recipe(
    body: Optional[AddRecipeRequest] = None,
    auth: AuthContext = Depends(get_auth_context),
    store: DocumentStore = Depends(get_document_store),
) -> RecipeCreatedResponse:
    recipe_id = await recipe_service.add_recipe(store, auth, body or AddRecipeRequest())
    return RecipeCreatedResponse(message="Recipe added successfully", recipe_id=recipe_id)
