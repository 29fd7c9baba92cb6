# core/storage.py

"""
Identity-document storage.

Objects live under a per-user key prefix: "<user_id>/<millis>.<ext>".
The access rule is the ownership rule applied to the first path segment:
a user writes only under their own prefix and reads their own prefix;
a super admin reads any prefix.
"""

import re
import time
from typing import BinaryIO, Optional

from botocore.exceptions import BotoCoreError, ClientError

from core.config import settings
from core.errors import PermissionDenied, RecordNotFound, TransientServiceFailure
from core.logging_config import logger
from core.s3_client import get_s3
from models.auth import CurrentUser


# -----------------------------------------------------
# Key helpers
# -----------------------------------------------------
def file_extension(filename: Optional[str]) -> str:
    if not filename or "." not in filename:
        return "bin"
    ext = filename.rsplit(".", 1)[1].lower()
    ext = re.sub(r"[^a-z0-9]", "", ext)
    return ext or "bin"


def id_document_key(user_id: str, filename: Optional[str], now_ms: Optional[int] = None) -> str:
    stamp = now_ms if now_ms is not None else int(time.time() * 1000)
    return f"{user_id}/{stamp}.{file_extension(filename)}"


def key_owner(key: str) -> Optional[str]:
    parts = key.split("/", 1)
    if len(parts) != 2 or not parts[0] or not parts[1]:
        return None
    return parts[0]


# -----------------------------------------------------
# Access rule
# -----------------------------------------------------
def can_upload(user: CurrentUser, key: str) -> bool:
    return key_owner(key) == user.id


def can_view(user: CurrentUser, key: str) -> bool:
    owner = key_owner(key)
    if owner is None:
        return False
    return owner == user.id or user.is_super_admin


# -----------------------------------------------------
# Operations
# -----------------------------------------------------
def upload_id_document(
    user: CurrentUser,
    fileobj: BinaryIO,
    filename: Optional[str],
    content_type: Optional[str] = None,
) -> str:
    key = id_document_key(user.id, filename)
    if not can_upload(user, key):
        raise PermissionDenied("Documents may only be uploaded under your own folder")

    try:
        s3, bucket, _ = get_s3()
        extra = {"ContentType": content_type} if content_type else None
        if extra:
            s3.upload_fileobj(fileobj, bucket, key, ExtraArgs=extra)
        else:
            s3.upload_fileobj(fileobj, bucket, key)
    except (RuntimeError, BotoCoreError, ClientError) as e:
        logger.error(f"ID document upload failed for {user.id}: {e}")
        raise TransientServiceFailure("ID document upload failed") from e

    logger.info(f"Stored ID document {key}")
    return key


def presign_id_document(user: CurrentUser, key: Optional[str]) -> str:
    # invisible and missing objects look the same
    if not key or not can_view(user, key):
        raise RecordNotFound("ID document not found")

    try:
        s3, bucket, _ = get_s3()
        return s3.generate_presigned_url(
            "get_object",
            Params={"Bucket": bucket, "Key": key},
            ExpiresIn=settings.ID_DOCUMENT_URL_EXPIRY_SECONDS,
        )
    except (RuntimeError, BotoCoreError, ClientError) as e:
        logger.error(f"Presign failed for {key}: {e}")
        raise TransientServiceFailure("Could not create document link") from e
