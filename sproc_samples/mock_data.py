from __future__ import annotations

from typing import Type, TypeVar

from faker import Faker

fake = Faker()

UserT = TypeVar("UserT")


def create_user(model: Type[UserT], is_active: bool) -> UserT:
    """Build an unsaved user of ``model`` with a fake name and email."""
    return model(
        name=fake.name(),
        email=fake.email(),
        is_active=is_active,
    )


def create_active_user(model: Type[UserT]) -> UserT:
    return create_user(model, True)


def create_inactive_user(model: Type[UserT]) -> UserT:
    return create_user(model, False)
