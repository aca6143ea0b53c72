"""
RecipeBook Backend — Favorite Recipes Route Handlers
======================================================

What:  POST /save-favorites (toggle one favorite) and GET /fetch-favorites/{userId}.
Who:   Called by the recipe list and favorites screens.
"""

from typing import Optional

from fastapi import APIRouter, Depends

from recipebook.dependencies import get_document_store
from recipebook.schemas.common import ErrorResponse, MessageResponse
from recipebook.schemas.recipe import FavoritesResponse, SaveFavoriteRequest
from recipebook.services.favorite_service import favorite_service
from recipebook.services.store_base import DocumentStore

router = APIRouter(tags=["Favorites"])


@router.post(
    "/save-favorites",
    response_model=MessageResponse,
    responses={
        400: {"description": "userId or recipeId missing", "model": ErrorResponse},
        404: {"description": "User not found", "model": ErrorResponse},
        500: {"description": "Store failure", "model": ErrorResponse},
    },
    summary="Add or remove a favorite recipe",
)
async def save_favorites(
    body: Optional[SaveFavoriteRequest] = None,
    store: DocumentStore = Depends(get_document_store),
) -> MessageResponse:
    """
    `recipes.isFavorite` truthy adds the reference, falsy removes it.
    Retrying an add is harmless (array-union), but the reference is matched
    by whole-object equality on removal.
    """
    added = await favorite_service.save_favorite(store, body or SaveFavoriteRequest())
    if added:
        return MessageResponse(message="Recipe added to favorites")
    return MessageResponse(message="Recipe removed from favorites")


@router.get(
    "/fetch-favorites/{userId}",
    response_model=FavoritesResponse,
    responses={
        404: {"description": "User not found", "model": ErrorResponse},
        500: {"description": "Store failure", "model": ErrorResponse},
    },
    summary="List a user's favorite recipes",
)
async def fetch_favorites(
    userId: str,
    store: DocumentStore = Depends(get_document_store),
) -> FavoritesResponse:
    favorites = await favorite_service.fetch_favorites(store, userId)
    return FavoritesResponse(favorite_recipes=favorites)
