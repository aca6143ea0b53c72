"""
RecipeBook Backend — Recipe Creation Service
==============================================

What:  Creates recipe records owned by the authenticated caller.
How:   1. Allocate a key in the recipes collection
       2. Write the whole recipe record
       3. Atomically append the key to the owner's `created_recipes`
          (only when the owner's user record exists)
Who:   Called by recipebook.routes.recipes with the caller's AuthContext.

Not idempotent: a retried request creates a second recipe.
"""

import logging

from recipebook.config import settings
from recipebook.dependencies import AuthContext
from recipebook.exceptions import ValidationError
from recipebook.schemas.recipe import AddRecipeRequest, is_missing
from recipebook.services.store_base import DocumentStore

logger = logging.getLogger(__name__)

CREATED_FIELD = "created_recipes"


class RecipeService:
    async def add_recipe(
        self,
        store: DocumentStore,
        auth: AuthContext,
        request: AddRecipeRequest,
    ) -> str:
        """
        Create a recipe for `auth.uid` and return its id.

        Raises:
            ValidationError:    title, ingredients or instructions missing (400, "error")
            DocumentStoreError: store failure (500)
        """
        if any(is_missing(v) for v in (request.title, request.ingredients, request.instructions)):
            raise ValidationError(message="Missing required fields", body_key="error")

        recipes = settings.recipes_collection
        recipe_id = store.new_key(recipes)
        await store.set(
            recipes,
            recipe_id,
            {
                "recipe_id": recipe_id,
                "user_id": auth.uid,
                "title": request.title,
                "ingredients": request.ingredients,
                "instructions": request.instructions,
                "image_url": request.image_url or "",
            },
        )

        owner = auth.user_ref
        if await store.get(owner.collection, owner.key) is not None:
            await store.array_union(owner.collection, owner.key, CREATED_FIELD, [recipe_id])
        else:
            logger.warning("Recipe %s created by %s, who has no user record", recipe_id, auth.uid)

        logger.info("Recipe %s created by %s", recipe_id, auth.uid)
        return recipe_id


recipe_service = RecipeService()
