"""Reading uploaded source files."""

from __future__ import annotations

import logging
import os

from fastapi import UploadFile

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


class UploadRejectedError(Exception):
    """An upload that cannot be analyzed."""

    def __init__(self, status_code: int, message: str, details: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.details = details


async def read_upload(upload: UploadFile, max_bytes: int, allowed_extensions: list[str]) -> str:
    """Read an uploaded file as text.

    The upload is always closed afterwards, which removes its spooled
    temporary file.
    """
    try:
        filename = upload.filename or ""
        ext = os.path.splitext(filename)[1].lower()
        if allowed_extensions and ext not in allowed_extensions:
            logger.warning(f"Rejected upload with unsupported extension: {filename!r}")
            raise UploadRejectedError(
                415, "Unsupported file type", f"Extension {ext or '(none)'} is not accepted"
            )

        data = bytearray()
        while chunk := await upload.read(CHUNK_SIZE):
            data.extend(chunk)
            if len(data) > max_bytes:
                logger.warning(f"Rejected upload larger than {max_bytes} bytes: {filename!r}")
                raise UploadRejectedError(
                    413, "File too large", f"Maximum upload size is {max_bytes} bytes"
                )

        try:
            return bytes(data).decode("utf-8-sig")
        except UnicodeDecodeError:
            logger.warning(f"Rejected non UTF-8 upload: {filename!r}")
            raise UploadRejectedError(400, "Uploaded file must be UTF-8 text") from None
    finally:
        await upload.close()
