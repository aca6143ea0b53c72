"""
RecipeBook Backend — Abstract Identity Provider Interface
===========================================================

What:  Abstract base class for the account/credential collaborator.
How:   FirebaseIdentityProvider implements it against Firebase Authentication;
       the test suite provides an in-memory implementation.
Who:   Called by UserService and by the bearer-token dependency.
"""

from abc import ABC, abstractmethod
from typing import List


class IdentityProvider(ABC):
    """
    Capability set consumed from the identity service.

    Contract:
        - Identifiers are opaque strings issued by the provider
        - Implementations translate provider errors into RecipeBook exceptions:
          ConflictError, NotFoundError, AuthenticationError, IdentityProviderError
        - Calls are single-attempt; no retries
    """

    @abstractmethod
    async def create_account(self, email: str, password: str, display_name: str) -> str:
        """
        Create a new account and return its identifier.

        Raises:
            ConflictError: The provider already holds an account for `email`
            IdentityProviderError: Any other rejection (weak password, bad email, ...)
        """

    @abstractmethod
    async def verify_token(self, token: str) -> str:
        """
        Verify a bearer token and return the subject identifier.

        Raises:
            AuthenticationError: Token is expired, revoked, malformed or forged
        """

    @abstractmethod
    async def get_account_by_email(self, email: str) -> str:
        """
        Return the identifier of the account registered with `email`.

        Raises:
            NotFoundError: No account uses this email
        """

    @abstractmethod
    async def list_all_accounts(self) -> List[str]:
        """Return the identifiers of every account, across all result pages."""

    @abstractmethod
    async def delete_account(self, uid: str) -> None:
        """Delete the account `uid`."""
