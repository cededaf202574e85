"""
Ownership

One capability shared by every owner-scoped entity (workouts, meals,
progress entries, posts): a `user_id` attribute naming the owner. Mutations
go through `assert_owner`, which compares the stored owner with the acting
user and raises Forbidden otherwise.

Usage:
======
    from fitshare.shared.services.ownership import assert_owner

    workout = await repo.get(workout_id)
    assert_owner(workout, actor_id, action="update", resource_name="workout")
"""

from typing import Protocol, runtime_checkable
from uuid import UUID

from fitshare.shared.core.exceptions import AuthorizationError


@runtime_checkable
class Owned(Protocol):
    """Anything with an owning user."""

    user_id: UUID


def is_owner(resource: Owned, actor_id: UUID) -> bool:
    """True when the acting user owns the resource."""
    return resource.user_id == actor_id


def assert_owner(
    resource: Owned,
    actor_id: UUID,
    action: str = "modify",
    resource_name: str = "resource",
) -> None:
    """
    Fail with 403 unless actor_id owns the resource.

    Raises:
        AuthorizationError: Acting user is not the owner
    """
    if not is_owner(resource, actor_id):
        raise AuthorizationError(f"Not authorized to {action} this {resource_name}")
