from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from splitter.db.session import get_db
from splitter.schemas.user import UserCreate, UserLogin, UserOut, UserRename, TokenOut
from splitter.models.user import User
from splitter.services.user_service import create_user, authenticate_user, rename_user
from splitter.core.dependencies import get_current_user
from splitter.core.errors import Unauthenticated
from splitter.core.jwt_config import TokenVerifier, get_token_verifier

router = APIRouter()


@router.post("/register", response_model=TokenOut, status_code=status.HTTP_201_CREATED)
async def register_user(
    data: UserCreate,
    db: AsyncSession = Depends(get_db),
    verifier: TokenVerifier = Depends(get_token_verifier),
):
    user = await create_user(db, data)
    return TokenOut(token=verifier.issue(user.id), user=UserOut.model_validate(user))


@router.post("/login", response_model=TokenOut)
async def login_user(
    data: UserLogin,
    db: AsyncSession = Depends(get_db),
    verifier: TokenVerifier = Depends(get_token_verifier),
):
    user = await authenticate_user(db, data.email, data.password)

    if not user:
        raise Unauthenticated("Invalid email or password")

    return TokenOut(token=verifier.issue(user.id), user=UserOut.model_validate(user))


@router.get("/me", response_model=UserOut)
async def read_users_me(current_user: User = Depends(get_current_user)):
    return UserOut.model_validate(current_user)


@router.patch("/me", response_model=UserOut)
async def rename_me(
    data: UserRename,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    user = await rename_user(db, current_user, data.name)
    return UserOut.model_validate(user)
