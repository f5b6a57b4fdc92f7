"""
CV Pydantic schemas
"""
from typing import Optional

from pydantic import BaseModel

from hiretrack.app.utils.dates import isoformat_utc


class CVOut(BaseModel):
    id: int
    userId: int
    fileName: str
    fileUrl: str
    fileSize: int = 0
    version: Optional[str] = None
    isDefault: bool = False
    uploadedAt: Optional[str] = None


def cv_to_out(cv) -> CVOut:
    return CVOut(
        id=cv.id,
        userId=cv.user_id,
        fileName=cv.file_name,
        fileUrl=cv.file_url,
        fileSize=cv.file_size or 0,
        version=cv.version,
        isDefault=bool(cv.is_default),
        uploadedAt=isoformat_utc(cv.uploaded_at),
    )
