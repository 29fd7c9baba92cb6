# core/s3_client.py

from typing import Tuple

import boto3

from core.config import settings


def get_s3() -> Tuple[object, str, str]:
    """
    Get S3 client, identity-document bucket name, and region.
    Returns: (s3_client, bucket_name, region)
    Raises RuntimeError if AWS credentials or the bucket are missing.
    """
    key = settings.AWS_ACCESS_KEY_ID
    secret = settings.AWS_SECRET_ACCESS_KEY
    bucket = settings.ID_DOCUMENTS_BUCKET
    region = settings.AWS_REGION

    if not all([key, secret, bucket]):
        raise RuntimeError("Missing AWS credentials or ID_DOCUMENTS_BUCKET")

    client = boto3.client(
        "s3",
        aws_access_key_id=key,
        aws_secret_access_key=secret,
        region_name=region,
    )

    return client, bucket, region
