import io
import os
from pathlib import Path
from uuid import uuid4

R2_ENV_VARS = ("R2_ACCOUNT_ID", "R2_ACCESS_KEY_ID", "R2_SECRET_ACCESS_KEY", "R2_BUCKET_NAME", "R2_PUBLIC_URL")


def _get_required_env(var_name: str) -> str:
    value = os.getenv(var_name, "").strip()
    if not value:
        raise RuntimeError(f"Missing required environment variable: {var_name}")
    return value


def is_configured() -> bool:
    return all(os.getenv(name, "").strip() for name in R2_ENV_VARS)


def _get_r2_client():
    r2_account_id = _get_required_env("R2_ACCOUNT_ID")
    r2_access_key_id = _get_required_env("R2_ACCESS_KEY_ID")
    r2_secret_access_key = _get_required_env("R2_SECRET_ACCESS_KEY")

    import boto3

    return boto3.client(
        "s3",
        endpoint_url=f"https://{r2_account_id}.r2.cloudflarestorage.com",
        aws_access_key_id=r2_access_key_id,
        aws_secret_access_key=r2_secret_access_key,
        region_name="auto",
    )


def _sanitize_key_part(part: str) -> str:
    return part.strip().strip("/")


def build_object_key(user_id: int, filename: str | None, category: str = "storefront") -> str:
    extension = Path(filename or "").suffix.lower()
    return "/".join(["users", _sanitize_key_part(str(user_id)), _sanitize_key_part(category), f"{uuid4().hex}{extension}"])


def upload_bytes(
    content: bytes,
    *,
    user_id: int,
    filename: str | None,
    content_type: str,
    category: str = "storefront",
) -> str:
    """Store ``content`` in the R2 bucket and return its public URL."""
    r2_bucket_name = _get_required_env("R2_BUCKET_NAME")
    r2_public_url = _get_required_env("R2_PUBLIC_URL").rstrip("/")

    object_key = build_object_key(user_id, filename, category)
    _get_r2_client().upload_fileobj(
        io.BytesIO(content),
        r2_bucket_name,
        object_key,
        ExtraArgs={"ContentType": content_type},
    )
    return f"{r2_public_url}/{object_key}"
