# eventa/services/users.py
import os

import anyio

from eventa.api_client import request, unwrap
from eventa.errors import InputValidationError
from eventa.models.user import ProfileUpdate, UserProfile

ALLOWED_AVATAR_EXTENSIONS = (".jpg", ".jpeg", ".png")


async def get_current_profile(session) -> UserProfile:
    body = await request(
        session.client, "GET", "users/current-profile",
        headers=session.auth_headers(),
        default_error="Could not load the profile.",
    )
    return UserProfile.model_validate(unwrap(body))


async def update_profile(session, update: ProfileUpdate):
    return await request(
        session.client, "PUT", "users/update-profile",
        json=update.to_payload(),
        headers=session.auth_headers(),
        default_error="Could not update the profile.",
    )


async def upload_avatar(session, image_path: str):
    """Upload a profile picture; only JPEG and PNG files are accepted."""
    if not image_path.lower().endswith(ALLOWED_AVATAR_EXTENSIONS):
        raise InputValidationError("Only .jpg, .jpeg and .png images are supported")

    headers = session.auth_headers()
    content = await anyio.Path(image_path).read_bytes()
    content_type = "image/png" if image_path.lower().endswith(".png") else "image/jpeg"

    return await request(
        session.client, "POST", "users/upload-profile-picture",
        files={"file": (os.path.basename(image_path), content, content_type)},
        headers=headers,
        default_error="Could not upload the picture.",
    )


async def delete_account(session):
    await request(
        session.client, "DELETE", "users/delete-account",
        headers=session.auth_headers(),
        default_error="Could not delete the account.",
    )
    await session.logout()
