"""Authentication dependency utilities.

Routes declare who may call them through ``RequiredAuth`` (any signed-in user) or
``Depends(require_roles(...))``.
"""

from collections.abc import Awaitable, Callable
from typing import Annotated

from fastapi import Depends, Request

from recipe_manager.core.logging import get_logger
from recipe_manager.core.security import authenticate_request
from recipe_manager.enums.role_enum import RoleEnum
from recipe_manager.exceptions.custom_exceptions import ForbiddenError
from recipe_manager.utils.tokens import TokenClaims

_log = get_logger(__name__)


class UserContext:
    """Container for authenticated user information."""

    def __init__(self, claims: TokenClaims) -> None:
        """Initialize user context from decoded token claims.

        Args:
            claims: Claims of the caller's access token.
        """
        self.user_id = claims.user_id
        self.roles = set(claims.roles)

    def has_any_role(self, roles: tuple[RoleEnum, ...]) -> bool:
        """Check whether the user holds one of ``roles``; an empty tuple allows all."""
        return not roles or bool(self.roles.intersection(roles))

    def require_any_role(self, roles: tuple[RoleEnum, ...]) -> None:
        """Require one of ``roles``.

        Raises:
            ForbiddenError: If the user holds none of them.
        """
        if not self.has_any_role(roles):
            _log.warning(
                "User {} lacks roles {}",
                self.user_id,
                [role.value for role in roles],
            )
            raise ForbiddenError()


async def get_required_user_context(request: Request) -> UserContext:
    """Get user context, requiring a valid access token.

    Raises:
        InvalidCredentialsError: If the header is missing, malformed or carries a
            refresh token.
        ExpiredTokenError: If the token has expired.
        InvalidTokenError: If the token cannot be validated.
    """
    return UserContext(authenticate_request(request))


def require_roles(*roles: RoleEnum) -> Callable[..., Awaitable[UserContext]]:
    """Create a dependency that admits users holding any of ``roles``.

    Args:
        roles: Accepted roles; none means every authenticated user.

    Returns:
        A dependency function returning the caller's context.
    """

    async def role_dependency(
        user_context: Annotated[UserContext, Depends(get_required_user_context)],
    ) -> UserContext:
        user_context.require_any_role(roles)
        return user_context

    return role_dependency


RequiredAuth = Annotated[UserContext, Depends(get_required_user_context)]
AdminAuth = Annotated[UserContext, Depends(require_roles(RoleEnum.ADMIN))]
CreatorAuth = Annotated[
    UserContext, Depends(require_roles(RoleEnum.ADMIN, RoleEnum.CREATOR))
]
