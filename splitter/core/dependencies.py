import logging
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession
from splitter.db.session import get_db
from splitter.core.errors import Unauthenticated
from splitter.core.jwt_config import TokenVerifier, get_token_verifier
from splitter.services.user_service import get_user_by_id

logger = logging.getLogger(__name__)


async def get_current_user(
    request: Request,
    db: AsyncSession = Depends(get_db),
    verifier: TokenVerifier = Depends(get_token_verifier),
):
    user_id = verifier.subject_id(request.headers.get("Authorization"))

    user = await get_user_by_id(db, user_id)
    if user is None:
        logger.warning("Token subject %s does not match any user", user_id)
        raise Unauthenticated("Not authorized, user not found")

    return user
