# services/auth.py
from datetime import datetime, timedelta, timezone
import logging

from fastapi import Depends, HTTPException
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt

import config
from database import DocumentStore, users_store

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/users/login")


def create_access_token(user: dict) -> str:
    expires = datetime.now(timezone.utc) + timedelta(minutes=config.JWT_EXPIRE_MINUTES)
    payload = {"sub": user["userCode"], "role": user["role"], "exp": expires}
    return jwt.encode(payload, config.JWT_SECRET, algorithm=config.JWT_ALGORITHM)


async def get_current_user(
    token: str = Depends(oauth2_scheme),
    users: DocumentStore = Depends(users_store),
):
    try:
        payload = jwt.decode(token, config.JWT_SECRET, algorithms=[config.JWT_ALGORITHM])
    except JWTError as e:
        logger.warning(f"JWTError: {str(e)}")
        raise HTTPException(status_code=401, detail="Invalid token")
    user_code = payload.get("sub")
    if not user_code:
        logger.warning("Invalid token: missing subject")
        raise HTTPException(status_code=401, detail="Invalid token")
    user = await users.find_one({"userCode": user_code})
    if not user:
        logger.warning(f"User not found for code: {user_code}")
        raise HTTPException(status_code=401, detail="User not found")
    return user
