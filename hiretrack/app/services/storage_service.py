"""
CV file storage - S3 when AWS credentials are configured, local upload dir otherwise.
"""
from pathlib import Path

from hiretrack.app.core.config import settings
from hiretrack.app.core.logging_config import get_logger
from hiretrack.app.services.s3_service import delete_file_from_s3, s3_configured, upload_file_to_s3

logger = get_logger("services.storage")


def _upload_path() -> Path:
    path = Path(settings.upload_dir)
    if not path.is_absolute():
        path = Path.cwd() / path
    return path


def save_file(contents: bytes, file_name: str, user_id: int, mime_type: str) -> dict:
    """Store file bytes. Returns {key, url}; raises RuntimeError on storage failure."""
    if s3_configured():
        return upload_file_to_s3(contents, file_name, user_id, mime_type)

    upload_path = _upload_path()
    try:
        upload_path.mkdir(parents=True, exist_ok=True)
        (upload_path / file_name).write_bytes(contents)
    except OSError as e:
        logger.error("Local CV write failed user_id=%s file_name=%s error=%s", user_id, file_name, e)
        raise RuntimeError(f"Failed to store file: {e}") from e
    return {"key": file_name, "url": f"/{settings.upload_dir.strip('/')}/{file_name}"}


def delete_file(storage_key: str | None, file_url: str | None, user_id: int) -> bool:
    """
    Best-effort delete of a stored CV. Returns True if deleted or already gone,
    False on failure. Never raises.
    """
    if not storage_key:
        return True
    if file_url and file_url.startswith("http"):
        return delete_file_from_s3(storage_key)

    safe_name = Path(storage_key).name
    if not safe_name:
        return True
    file_path = _upload_path() / safe_name
    if not file_path.exists():
        return True
    try:
        file_path.unlink()
        logger.info("Deleted local CV file user_id=%s path=%s", user_id, file_path)
        return True
    except OSError as e:
        logger.warning("Failed to delete local CV %s: %s", file_path, e)
        return False
