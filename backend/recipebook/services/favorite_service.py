"""
RecipeBook Backend — Favorite Recipes Service
===============================================

What:  Adds, removes and lists the recipe references in a user's
       `favorite_recipes` array.
How:   Membership changes go straight to the store's atomic array-union /
       array-remove. The array is never read back and rewritten, so two
       concurrent toggles on the same user cannot overwrite each other.
Who:   Called by recipebook.routes.favorites.

Matching semantics:
    Favorites are whole objects compared by deep equality. The client toggles
    with `isFavorite`: truthy adds the object exactly as sent (flag included),
    falsy removes it. Since the stored copy carries `isFavorite: true` while
    the removal request carries a falsy flag, removal asks the store to drop
    both the object as sent and the same object with `isFavorite: true`.
    Every other field must still match exactly; a reference whose shape
    differs in any other key is silently left in place.
"""

import logging
from typing import Any, Dict, List

from recipebook.config import settings
from recipebook.exceptions import NotFoundError, ValidationError, retarget
from recipebook.schemas.recipe import SaveFavoriteRequest, is_missing
from recipebook.services.store_base import DocumentStore

logger = logging.getLogger(__name__)

FAVORITES_FIELD = "favorite_recipes"


def removal_candidates(reference: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Stored forms a removal request for `reference` may match."""
    candidates = [reference]
    as_stored = {**reference, "isFavorite": True}
    if as_stored != reference:
        candidates.append(as_stored)
    return candidates


class FavoriteService:
    """Stateless favorite-recipe operations; the store is passed per call."""

    async def save_favorite(self, store: DocumentStore, request: SaveFavoriteRequest) -> bool:
        """
        Add or remove one favorite reference.

        Returns:
            True when the reference was added, False when it was removed

        Raises:
            ValidationError: userId or recipes.recipeId missing (400, "error")
            NotFoundError:   no such user (404, "error")
            RecipeBookError: store failure (500, "Internal Server Error")
        """
        recipe = request.recipes or {}
        if is_missing(request.user_id) or is_missing(recipe.get("recipeId")):
            raise ValidationError(message="Missing userId or recipeId", body_key="error")

        users = settings.users_collection
        try:
            if await store.get(users, request.user_id) is None:
                raise NotFoundError(resource="user", message="User not found", body_key="error")

            if is_missing(recipe.get("isFavorite")):
                await store.array_remove(
                    users, request.user_id, FAVORITES_FIELD, removal_candidates(recipe)
                )
                logger.info("User %s unfavorited recipe %s", request.user_id, recipe["recipeId"])
                return False

            await store.array_union(users, request.user_id, FAVORITES_FIELD, [recipe])
            logger.info("User %s favorited recipe %s", request.user_id, recipe["recipeId"])
            return True
        except NotFoundError as e:
            raise e.with_status(404, "error")
        except Exception as e:
            logger.error("Error saving favorite recipe: %s", e, exc_info=True)
            error = retarget(e, 500)
            error.message = "Internal Server Error"
            raise error from e

    async def fetch_favorites(self, store: DocumentStore, user_id: str) -> List[Any]:
        """
        Return the user's favorite references (possibly empty).

        Raises:
            ValidationError: userId missing (400, "error")
            NotFoundError:   no such user (404, "error")
            RecipeBookError: store failure (500, "Internal Server Error")
        """
        if not user_id:
            raise ValidationError(message="Missing userId", body_key="error")

        try:
            user = await store.get(settings.users_collection, user_id)
        except Exception as e:
            logger.error("Error fetching favorite recipes: %s", e, exc_info=True)
            error = retarget(e, 500)
            error.message = "Internal Server Error"
            raise error from e

        if user is None:
            raise NotFoundError(resource="user", message="User not found", body_key="error")
        return user.data.get(FAVORITES_FIELD) or []


# Stateless, shared across requests
favorite_service = FavoriteService()
