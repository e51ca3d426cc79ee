import base64
import hashlib
import bcrypt
from splitter.core.config import settings


def _prehash(password: str) -> bytes:
    # bcrypt truncates at 72 bytes and rejects NUL bytes, so feed it a
    # fixed-length base64 sha256 digest instead of the raw password
    return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())


def hash_password(password: str) -> str:
    hashed = bcrypt.hashpw(_prehash(password), bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS))
    return hashed.decode()


def verify_password(password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.checkpw(_prehash(password), hashed_password.encode())
    except ValueError:
        # malformed stored hash
        return False
