"""Password Hashing: salted bcrypt, executed off the event loop.

Invariants:
    - Stored value is never the plaintext; each hash has its own salt
    - bcrypt only reads the first 72 bytes; longer passwords are refused at
      registration and can never verify
    - verify_password never raises on a malformed stored hash, it returns False
"""

import logging

import bcrypt
from starlette.concurrency import run_in_threadpool

logger = logging.getLogger(__name__)

MAX_PASSWORD_BYTES = 72


def hash_password_sync(password: str, rounds: int = 10) -> str:
    """Hash a password. Raises ValueError past MAX_PASSWORD_BYTES."""
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        raise ValueError(f"password longer than {MAX_PASSWORD_BYTES} bytes")
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(encoded, salt).decode("utf-8")


def verify_password_sync(password: str, hashed: str) -> bool:
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        return False
    try:
        return bcrypt.checkpw(encoded, hashed.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is not a valid bcrypt hash")
        return False


async def hash_password(password: str, rounds: int = 10) -> str:
    return await run_in_threadpool(hash_password_sync, password, rounds)


async def verify_password(password: str, hashed: str) -> bool:
    return await run_in_threadpool(verify_password_sync, password, hashed)
