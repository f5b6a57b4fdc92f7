"""
S3 storage for CV files, used when AWS credentials are configured.
Objects live under {s3_key_prefix}/{user_id}/{file_name}.
"""
import boto3
from botocore.exceptions import BotoCoreError, ClientError

from hiretrack.app.core.config import settings
from hiretrack.app.core.logging_config import get_logger

logger = get_logger("services.s3")


def s3_configured() -> bool:
    return bool(settings.aws_access_key_id and settings.aws_secret_access_key)


def object_key(user_id: int, file_name: str) -> str:
    return f"{settings.s3_key_prefix}/{user_id}/{file_name}"


def object_url(key: str) -> str:
    return f"https://{settings.aws_bucket_name}.s3.{settings.aws_region}.amazonaws.com/{key}"


def _client():
    return boto3.client(
        "s3",
        aws_access_key_id=settings.aws_access_key_id,
        aws_secret_access_key=settings.aws_secret_access_key,
        region_name=settings.aws_region,
    )


def upload_file_to_s3(
    file_buffer: bytes,
    file_name: str,
    user_id: int,
    mime_type: str = "application/octet-stream",
) -> dict:
    """Put a CV object. Returns {key, url}; raises RuntimeError when S3 rejects the upload."""
    if not s3_configured():
        raise RuntimeError("AWS credentials not configured (AWS_ACCESS_KEY_ID, AWS_SECRET_ACCESS_KEY)")
    key = object_key(user_id, file_name)
    logger.info(
        "S3 upload started bucket=%s key=%s user_id=%s size_bytes=%d",
        settings.aws_bucket_name,
        key,
        user_id,
        len(file_buffer),
    )
    try:
        _client().put_object(
            Bucket=settings.aws_bucket_name,
            Key=key,
            Body=file_buffer,
            ContentType=mime_type,
        )
    except ClientError as e:
        error = e.response.get("Error", {})
        code, msg = error.get("Code", ""), error.get("Message", str(e))
        logger.error(
            "S3 upload failed bucket=%s key=%s user_id=%s error_code=%s error_message=%s",
            settings.aws_bucket_name,
            key,
            user_id,
            code,
            msg,
        )
        raise RuntimeError(f"S3 upload failed - {code}: {msg}") from e
    except BotoCoreError as e:
        logger.error("S3 upload failed bucket=%s key=%s error=%s", settings.aws_bucket_name, key, e)
        raise RuntimeError(f"S3 upload failed - {e}") from e

    logger.info("S3 upload success bucket=%s key=%s", settings.aws_bucket_name, key)
    return {"key": key, "url": object_url(key)}


def delete_file_from_s3(key: str) -> bool:
    """Delete a CV object. False when S3 is not configured or the call fails."""
    if not s3_configured():
        return False
    try:
        _client().delete_object(Bucket=settings.aws_bucket_name, Key=key)
    except (ClientError, BotoCoreError) as e:
        logger.warning("S3 delete failed key=%s error=%s", key, e)
        return False
    logger.info("S3 delete success bucket=%s key=%s", settings.aws_bucket_name, key)
    return True
