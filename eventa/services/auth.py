# eventa/services/auth.py
import re

from pydantic import ValidationError

from eventa.api_client import request
from eventa.errors import InputValidationError
from eventa.models.user import LoginRequest, RegisterRequest, ResetPasswordRequest

EMAIL_PATTERN = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')


def validate_email(email: str) -> str:
    email = (email or "").strip()
    if not EMAIL_PATTERN.match(email):
        raise InputValidationError("Invalid email address")
    return email


def _first_error(e: ValidationError) -> str:
    err = e.errors()[0]
    return err["msg"].removeprefix("Value error, ")


async def send_verification_code(session, email: str):
    """Ask the backend to mail a sign-up code."""
    return await request(
        session.client, "POST", "auth/sendVerificationCode",
        json={"email": validate_email(email)},
        default_error="Could not send the verification code.",
    )


async def verify_code(session, email: str, code: str):
    return await request(
        session.client, "POST", "auth/verifyCode",
        json={"email": validate_email(email), "code": code},
        default_error="Invalid verification code.",
    )


async def register(session, email: str, code: str, full_name: str, password: str, confirm_password: str):
    try:
        payload = RegisterRequest(
            email=validate_email(email),
            code=code,
            full_name=full_name,
            password=password,
            confirm_password=confirm_password,
        )
    except ValidationError as e:
        raise InputValidationError(_first_error(e))

    return await request(
        session.client, "POST", "auth/register",
        json=payload.to_payload(),
        default_error="Registration failed.",
    )


async def login(session, email: str, password: str) -> dict:
    credentials = LoginRequest(email=validate_email(email), password=password)
    return await request(
        session.client, "POST", "auth/login",
        json=credentials.to_payload(),
        default_error="Login failed.",
    )


async def google_login(session, id_token: str) -> dict:
    return await request(
        session.client, "POST", "auth/google",
        json={"idToken": id_token},
        default_error="Google login failed.",
    )


async def send_reset_code(session, email: str):
    """First step of the forgotten-password flow."""
    return await request(
        session.client, "POST", "auth/forgotPassword",
        json={"email": validate_email(email)},
        default_error="Could not send the reset code.",
    )


async def reset_password(session, email: str, code: str, new_password: str, confirm_new_password: str):
    try:
        payload = ResetPasswordRequest(
            email=validate_email(email),
            code=code,
            new_password=new_password,
            confirm_new_password=confirm_new_password,
        )
    except ValidationError as e:
        raise InputValidationError(_first_error(e))

    return await request(
        session.client, "POST", "auth/resetPassword",
        json=payload.to_payload(),
        default_error="Could not reset the password.",
    )
