"""
RecipeBook Backend — Recipe & Favorite Schemas
================================================

What:  Request/response contracts for the favorites endpoints and recipe creation.

Favorite references:
    The `recipes` object of POST /save-favorites is kept as a plain dict and
    forwarded to the store untouched. Stored favorites are matched by whole-object
    equality, so the service must see exactly the keys the client sent; a
    pydantic model with defaults would add or reorder keys.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


def is_missing(value: Any) -> bool:
    """
    True for the values clients use to mean "not provided": null, "", false, 0.

    Empty lists and objects count as present; recipe fields carry no schema
    beyond presence.
    """
    if value is None or value is False:
        return True
    if isinstance(value, (str, int, float)):
        return not value or value != value
    return False


class SaveFavoriteRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: Optional[str] = Field(default=None, alias="userId")
    recipes: Optional[Dict[str, Any]] = Field(
        default=None,
        description="Recipe reference; must contain recipeId, isFavorite is the add/remove toggle",
    )


class FavoritesResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    favorite_recipes: List[Any] = Field(default_factory=list, alias="favoriteRecipes")


class AddRecipeRequest(BaseModel):
    title: Optional[Any] = None
    ingredients: Optional[Any] = None
    instructions: Optional[Any] = None
    image_url: Optional[str] = Field(default="", description="Defaults to an empty string")


class RecipeCreatedResponse(BaseModel):
    message: str = Field(default="Recipe added successfully")
    recipe_id: str
