import logging
from sqlalchemy import select, update, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from splitter.models.user import User
from splitter.models.expense_split import ExpenseSplit
from splitter.schemas.user import UserCreate
from splitter.core.security import hash_password, verify_password
from splitter.core.errors import InvalidInput

logger = logging.getLogger(__name__)


async def get_user_by_email(db: AsyncSession, email: str):
    result = await db.execute(select(User).where(User.email == email.lower()))
    return result.scalar_one_or_none()


async def get_user_by_id(db: AsyncSession, id: int):
    result = await db.execute(select(User).where(User.id == id))
    return result.scalar_one_or_none()


async def get_user_by_name(db: AsyncSession, name: str):
    result = await db.execute(select(User).where(User.name == name))
    return result.scalar_one_or_none()


async def _find_conflicting_user(db: AsyncSession, name: str, email: str):
    result = await db.execute(
        select(User.id).where(or_(User.email == email, User.name == name))
    )
    return result.first()


async def create_user(db: AsyncSession, data: UserCreate):
    name = data.name.strip()
    email = data.email.lower()
    if not name:
        raise InvalidInput()

    if await _find_conflicting_user(db, name, email):
        raise InvalidInput("User already exists")

    user = User(
        name=name,
        email=email,
        password_hash=hash_password(data.password),
    )
    db.add(user)
    try:
        await db.flush()  # gives user.id

        # splits that named this user before they registered
        claimed = await db.execute(
            update(ExpenseSplit)
            .where(ExpenseSplit.user_id.is_(None), ExpenseSplit.username == name)
            .values(user_id=user.id)
        )

        await db.commit()
    except IntegrityError:
        # lost a race with a concurrent registration
        await db.rollback()
        raise InvalidInput("User already exists")

    await db.refresh(user)

    logger.info("Registered user %s (linked %d pending splits)", user.id, claimed.rowcount or 0)
    return user


async def authenticate_user(db: AsyncSession, email: str, password: str):
    user = await get_user_by_email(db, email)
    if not user:
        return None

    if not verify_password(password, user.password_hash):
        return None

    return user


async def rename_user(db: AsyncSession, user: User, new_name: str):
    new_name = new_name.strip()
    if not new_name:
        raise InvalidInput()

    if new_name == user.name:
        return user

    taken = await get_user_by_name(db, new_name)
    if taken and taken.id != user.id:
        raise InvalidInput("Name already taken")

    user.name = new_name
    try:
        await db.execute(
            update(ExpenseSplit)
            .where(ExpenseSplit.user_id == user.id)
            .values(username=new_name)
        )
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise InvalidInput("Name already taken")

    await db.refresh(user)
    return user
