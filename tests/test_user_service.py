import pytest

from splitter.core.errors import InvalidInput
from splitter.schemas.user import UserCreate
from splitter.services import user_service
from splitter.services.user_service import create_user, rename_user


async def _no_conflict(*args, **kwargs):
    return None


async def test_register_race_on_unique_index(test_db, alice, monkeypatch):
    # the pre-check passes as if the other registration had not committed yet
    monkeypatch.setattr(user_service, "_find_conflicting_user", _no_conflict)

    with pytest.raises(InvalidInput) as exc:
        await create_user(test_db, UserCreate(name="Alice", email="alice@splitter.io", password="secret123"))
    assert exc.value.message == "User already exists"


async def test_rename_race_on_unique_index(test_db, alice, bob, monkeypatch):
    monkeypatch.setattr(user_service, "get_user_by_name", _no_conflict)

    with pytest.raises(InvalidInput) as exc:
        await rename_user(test_db, alice, "Bob")
    assert exc.value.message == "Name already taken"
