"""User Accounts — signup, login by username or email, and /me.

Invariants:
    - POST /users/signup -> 201 {success, user}; 400 missing fields; 409 taken username/email
    - POST /users/login  -> 200 {success, token, user}; 401 unknown user or bad password
    - GET  /users/me     -> 200 {success, user}; 401 missing/invalid token
    - Responses never carry passwordHash
"""

from fastapi import APIRouter, Depends, Header, status

from shuttle.api.dependencies import get_user_service
from shuttle.schemas.resources import LoginRequest, SignupBody
from shuttle.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/signup", status_code=status.HTTP_201_CREATED)
async def signup(body: SignupBody, users: UserService = Depends(get_user_service)):
    return {"success": True, "user": users.signup(body.to_fields())}


@router.post("/login")
async def login(body: LoginRequest, users: UserService = Depends(get_user_service)):
    """Exchange a username (or email) and password for a JWT."""
    token, user = users.login(body.username, body.password)
    return {"success": True, "token": token, "user": user}


@router.get("/me")
async def current_user(
    authorization: str | None = Header(None),
    users: UserService = Depends(get_user_service),
):
    return {"success": True, "user": users.me(authorization)}
