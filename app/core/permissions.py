from typing import Callable, List
from fastapi import Depends, HTTPException, status
from app.core.deps import get_current_active_user
from app.models.user import User, UserRole

TRAVEL_MANAGER_ROLES = [UserRole.ADMIN, UserRole.STAFF]

def has_any_role(user: User, required_roles: List[UserRole]) -> bool:
    """Check if user has any of the required roles"""
    return user.role in required_roles

def has_travel_permissions(user: User) -> bool:
    """Check if user may create or change tickets, flights and visas"""
    return has_any_role(user, TRAVEL_MANAGER_ROLES)

def require_roles(*roles: UserRole) -> Callable[..., User]:
    """Dependency that rejects users without one of the given roles."""
    allowed = list(roles) or TRAVEL_MANAGER_ROLES

    def checker(current_user: User = Depends(get_current_active_user)) -> User:
        if not has_any_role(current_user, allowed):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Not enough permissions"
            )
        return current_user

    return checker

require_travel_manager = require_roles(*TRAVEL_MANAGER_ROLES)
