from typing import Optional

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from config import ApplicationConfig
from src.api.error import ClientError, ServerError
from src.app.use_cases.auth import (
    ConfirmPasswordResetResponse,
    ConfirmPasswordResetUseCase,
    GetSessionUserUseCase,
    RequestPasswordResetResponse,
    RequestPasswordResetUseCase,
    SessionStatusResponse,
    SignupCommand,
    SignupResponse,
    SignupUseCase,
)
from src.depends import (
    get_confirm_password_reset_use_case,
    get_request_password_reset_use_case,
    get_session_user_use_case,
    get_signup_use_case,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])


def set_session_cookie(response: Response, session_token: str) -> None:
    response.set_cookie(
        key=ApplicationConfig.SESSION_COOKIE_NAME,
        value=session_token,
        max_age=ApplicationConfig.SESSION_TTL_DAYS * 24 * 60 * 60,
        path="/",
        httponly=True,
        secure=ApplicationConfig.SESSION_COOKIE_SECURE,
        samesite="lax",
    )


class SignupRequest(BaseModel):
    """
    Signup HTTP request payload

    Field rules (email format, password length) are enforced by the use case.
    """

    email: str = Field(..., description="User email address")
    password: str = Field(..., description="User password (min 8 chars)")
    name: Optional[str] = Field(default=None, max_length=255, description="Display name")


@router.post("/signup", status_code=status.HTTP_200_OK, response_model=SignupResponse)
async def signup(
    request: SignupRequest,
    response: Response,
    use_case: SignupUseCase = Depends(get_signup_use_case),
):
    """
    User Signup

    Creates an account with a password and signs the user in.

    Raises:
        - 400 Bad Request: Invalid email or password
        - 409 Conflict: Email already registered
        - 500 Internal Server Error: Server error
    """
    command = SignupCommand(email=request.email, password=request.password, name=request.name)
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code == "VALIDATION_ERROR":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "EMAIL_ALREADY_EXISTS":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    set_session_cookie(response, result.value.session_token)
    return result.value


@router.get("/session", response_model=SessionStatusResponse)
async def check_session(
    request: Request,
    use_case: GetSessionUserUseCase = Depends(get_session_user_use_case),
):
    """
    Check Session

    Returns:
        - 200 OK: {authenticated: true, user}
        - 401 Unauthorized: {authenticated: false}
        - 500 Internal Server Error: store failure
    """
    credential = request.cookies.get(ApplicationConfig.SESSION_COOKIE_NAME)
    result = await use_case.execute(credential)

    if result.is_err():
        if result.error.code == "INTERNAL_ERROR":
            raise ServerError(result.error)
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED, content={"authenticated": False}
        )

    return result.value


@router.post("/signout", status_code=status.HTTP_200_OK)
async def signout(response: Response):
    """Sign out by clearing the session cookie"""
    response.delete_cookie(ApplicationConfig.SESSION_COOKIE_NAME, path="/")
    return {"success": True}


class ForgotPasswordRequest(BaseModel):
    """Forgot password HTTP request payload"""

    email: str = Field(..., description="User email address")


@router.post(
    "/forgot-password",
    status_code=status.HTTP_200_OK,
    response_model=RequestPasswordResetResponse,
)
async def forgot_password(
    request: ForgotPasswordRequest,
    use_case: RequestPasswordResetUseCase = Depends(get_request_password_reset_use_case),
):
    """
    Request Password Reset

    Issues a reset token and emails the reset link when an account with a
    password exists for the address.

    Security:
        - No email enumeration (same response for known and unknown emails)
        - At most 3 requests per email per minute (per process)
        - Only a bcrypt hash of the token is stored; the token expires in 30 minutes

    Returns:
        - 200 OK: Generic confirmation
        - 400 Bad Request: Malformed email
        - 429 Too Many Requests: Rate limit exceeded
        - 500 Internal Server Error: Server error
    """
    result = await use_case.execute(request.email)

    if result.is_err():
        error = result.error
        if error.code == "VALIDATION_ERROR":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "RATE_LIMITED":
            raise ClientError(error, status_code=status.HTTP_429_TOO_MANY_REQUESTS)
        raise ServerError(error)

    return result.value


class ResetPasswordRequest(BaseModel):
    """Reset password HTTP request payload"""

    model_config = ConfigDict(populate_by_name=True)

    token: str = Field(..., description="Password reset token from email")
    new_password: str = Field(
        ..., alias="newPassword", description="New password (min 8 chars)"
    )


@router.post(
    "/reset-password",
    status_code=status.HTTP_200_OK,
    response_model=ConfirmPasswordResetResponse,
)
async def reset_password(
    request: ResetPasswordRequest,
    response: Response,
    use_case: ConfirmPasswordResetUseCase = Depends(get_confirm_password_reset_use_case),
):
    """
    Confirm Password Reset

    Validates the reset token, replaces the password, deletes every reset
    token of the user and signs the user in with a new session cookie.

    Security:
        - Unknown, mismatching and expired tokens get the same 400 response
        - Response body does not identify the user

    Raises:
        - 400 Bad Request: Invalid or expired token, or password validation failed
        - 500 Internal Server Error: Server error
    """
    result = await use_case.execute(request.token, request.new_password)

    if result.is_err():
        error = result.error
        if error.code in ("VALIDATION_ERROR", "INVALID_OR_EXPIRED_TOKEN"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    set_session_cookie(response, result.value.session_token)
    return result.value
