# routes/users.py
from datetime import datetime, timezone
import logging

from fastapi import APIRouter, Depends, HTTPException

from database import DocumentStore, users_store
from errors import InvalidCredential, NotFound, ValidationError
from models.user import LoginRequest, PasswordChange, UserCreate, UserUpdate
from services.auth import create_access_token, get_current_user
from services.codes import ensure_code
from services.credentials import hash_if_needed, verify_password
from services.reports import public_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post("/create", status_code=201)
async def create_user(user: UserCreate, users: DocumentStore = Depends(users_store)):
    logger.info(f"Creating user with email: {user.email}, role: {user.role}")
    if await users.exists({"email": user.email}):
        raise HTTPException(status_code=409, detail="Email already registered")

    now = datetime.now(timezone.utc)
    user_dict = user.model_dump()
    user_dict["password"] = hash_if_needed(user_dict["password"])
    user_dict["createdAt"] = now
    user_dict["updatedAt"] = now

    async def code_taken(code: str) -> bool:
        return await users.exists({"userCode": code})

    await ensure_code(user_dict, "userCode", "fullName", code_taken, "USR")
    saved = await users.save(user_dict)
    logger.info(f"User created: {saved['userCode']}")
    return {"message": "User created successfully", "user": public_user(saved)}


@router.get("/all")
async def get_all_users(users: DocumentStore = Depends(users_store)):
    return [public_user(u) for u in await users.find()]


@router.get("/role/{role}")
async def get_users_by_role(role: str, users: DocumentStore = Depends(users_store)):
    logger.info(f"Fetching users with role={role}")
    return [public_user(u) for u in await users.find({"role": role})]


@router.post("/login")
async def login_user(request: LoginRequest, users: DocumentStore = Depends(users_store)):
    logger.info(f"Login attempt for email: {request.email}")
    user = await users.find_one({"email": request.email})
    if not user or not verify_password(request.password, user.get("password")):
        logger.warning(f"Failed login for email: {request.email}")
        raise InvalidCredential("Invalid email or password")

    return {
        "message": "Login successful",
        "access_token": create_access_token(user),
        "token_type": "bearer",
        "user": public_user(user),
    }


@router.get("/me")
async def get_current_user_endpoint(current_user: dict = Depends(get_current_user)):
    return public_user(current_user)


@router.get("/{user_code}")
async def get_user_by_code(user_code: str, users: DocumentStore = Depends(users_store)):
    user = await users.find_one({"userCode": user_code})
    if not user:
        raise NotFound(f"User not found: {user_code}")
    return public_user(user)


@router.put("/{user_code}")
async def update_user(user_code: str, update_data: UserUpdate, users: DocumentStore = Depends(users_store)):
    update_dict = update_data.model_dump(exclude_unset=True)
    logger.info(f"Updating user {user_code} fields: {sorted(update_dict)}")
    if not update_dict:
        raise ValidationError("No fields to update")
    update_dict["updatedAt"] = datetime.now(timezone.utc)

    matched = await users.set_fields({"userCode": user_code}, update_dict)
    if matched == 0:
        raise NotFound(f"User not found: {user_code}")
    return public_user(await users.find_one({"userCode": user_code}))


@router.put("/{user_code}/password")
async def change_password(user_code: str, change: PasswordChange, users: DocumentStore = Depends(users_store)):
    logger.info(f"Password change for user {user_code}")
    user = await users.find_one({"userCode": user_code})
    if not user:
        raise NotFound(f"User not found: {user_code}")
    if not verify_password(change.currentPassword, user.get("password")):
        raise InvalidCredential("Current password is incorrect")

    await users.set_fields(
        {"userCode": user_code},
        {"password": hash_if_needed(change.newPassword), "updatedAt": datetime.now(timezone.utc)},
    )
    return {"message": "Password updated"}
