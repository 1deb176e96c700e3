from fastapi import HTTPException, UploadFile
from typing import Optional


def require_image(file: Optional[UploadFile]) -> UploadFile:
    """400 unless a file was sent and it declares an image/* content type."""
    if file is None or not file.filename:
        raise HTTPException(status_code=400, detail="No file was uploaded")
    if not (file.content_type or "").startswith("image/"):
        raise HTTPException(status_code=400, detail="Only image files are accepted")
    return file
