"""
RecipeBook Backend — Account & Session Schemas
================================================

What:  Request/response contracts for signup, login, signout, session checks
       and user detail lookups.

Request fields are all Optional on purpose: presence is checked by the
services so a missing field yields the endpoint's documented 400 body rather
than FastAPI's generic 422. Wire names are camelCase where the clients
already send camelCase (firstName, sessionId) and snake_case elsewhere
(token_id); both are kept as-is.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class SignupRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: Optional[str] = None
    password: Optional[str] = None
    first_name: Optional[str] = Field(default=None, alias="firstName")
    last_name: Optional[str] = Field(default=None, alias="lastName")


class LoginRequest(BaseModel):
    email: Optional[str] = None
    token_id: Optional[str] = Field(
        default=None,
        description="Client-side session token stored on the user record as session_id",
    )


class SignoutRequest(BaseModel):
    email: Optional[str] = None


class CheckSessionRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    session_id: Optional[str] = Field(default=None, alias="sessionId")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class UserIdResponse(BaseModel):
    """Acknowledgement carrying the affected user's id: {"message", "userId"}."""

    model_config = ConfigDict(populate_by_name=True)

    message: str
    user_id: str = Field(alias="userId")


class UserDetailsResponse(BaseModel):
    """Profile and recipe lists returned by GET /fetch-user-details."""

    model_config = ConfigDict(populate_by_name=True)

    first_name: Optional[str] = Field(default=None, alias="firstName")
    last_name: Optional[str] = Field(default=None, alias="lastName")
    email: Optional[str] = None
    favorite_recipes: List[Any] = Field(default_factory=list)
    created_recipes: List[str] = Field(default_factory=list)
