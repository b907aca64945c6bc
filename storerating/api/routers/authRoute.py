import logging
from datetime import datetime, timezone

from fastapi import APIRouter

from storerating.api.core.dependencies import GetSession, requireSignin
from storerating.api.core.response import api_response, raiseExceptions
from storerating.api.core.security import (
    create_access_token,
    exist_user,
    hash_password,
    verify_password,
)
from storerating.api.models.usersModel import (
    ChangePasswordRequest,
    LoginRequest,
    RegisterUser,
    User,
    UserRead,
    UserRoleEnum,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


# ✅ REGISTER (normal users only)
@router.post("/register")
def register(request: RegisterUser, session: GetSession):
    raiseExceptions(
        (
            exist_user(session, request.email),
            400,
            "User with this email already exists",
            True,
        )
    )

    new_user = User(
        name=request.name,
        email=request.email,
        password=hash_password(request.password),
        address=request.address,
        role=UserRoleEnum.user,
    )
    session.add(new_user)
    session.commit()
    session.refresh(new_user)

    logger.info("User registered: id=%s email=%s", new_user.id, new_user.email)
    return api_response(201, "User registered successfully", UserRead.model_validate(new_user))


# ✅ LOGIN
@router.post("/login")
def login(request: LoginRequest, session: GetSession):
    user = exist_user(session, request.email)
    if not user or not verify_password(request.password, user.password):
        logger.debug("Failed login for %s", request.email)
        api_response(401, "Invalid email or password")

    token = create_access_token(user.token_claims())
    return api_response(
        200,
        "Login successful",
        {"token": token, "user": UserRead.model_validate(user)},
    )


# ✅ CURRENT USER
@router.get("/me")
def me(user: requireSignin, session: GetSession):
    db_user = session.get(User, user.get("id"))
    raiseExceptions((db_user, 404, "User not found"))
    return api_response(200, "User Found", UserRead.model_validate(db_user))


# ✅ CHANGE PASSWORD
@router.put("/update-password")
def update_password(
    request: ChangePasswordRequest,
    user: requireSignin,
    session: GetSession,
):
    db_user = session.get(User, user.get("id"))
    raiseExceptions((db_user, 404, "User not found"))

    if not verify_password(request.current_password, db_user.password):
        api_response(400, "Current password is incorrect")

    db_user.password = hash_password(request.new_password)
    db_user.updated_at = datetime.now(timezone.utc)
    session.add(db_user)
    session.commit()

    logger.info("Password updated for user %s", db_user.id)
    return api_response(200, "Password updated successfully")
