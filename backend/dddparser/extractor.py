"""
Data Extractor - Rohdaten aus dem Request holen

1. multipart/form-data mit Feld "file"
2. sonst der komplette Request-Body
"""

import logging

from fastapi import Request
from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException
from starlette.requests import ClientDisconnect

from .errors import PayloadError

logger = logging.getLogger(__name__)

FILE_FIELD = "file"


def _is_multipart(request: Request) -> bool:
    """multipart/form-data mit boundary-Parameter, sonst Roh-Body"""
    media_type, *params = request.headers.get("content-type", "").split(";")
    if media_type.strip().lower() != "multipart/form-data":
        return False
    return any(p.strip().lower().startswith("boundary=") for p in params)


async def extract_payload(request: Request) -> bytes:
    """
    Rohdaten aus dem Request lesen

    Der Request-Stream wird genau einmal gelesen. Ein multipart-Request
    ohne Feld "file" hat danach keinen Body mehr und gilt als leer.

    Returns:
        Rohdaten als bytes

    Raises:
        PayloadError: EMPTY_PAYLOAD oder READ_ERROR
    """
    if _is_multipart(request):
        try:
            # Upload-Dateien werden beim Verlassen des Blocks geschlossen
            async with request.form() as form:
                upload = form.get(FILE_FIELD)
                if isinstance(upload, UploadFile):
                    data = await upload.read()
                    logger.debug(f"Read {len(data)} bytes from multipart field '{FILE_FIELD}'")
                    return data
        except (ClientDisconnect, MultiPartException, StarletteHTTPException, OSError) as e:
            raise PayloadError.read_failed(e) from e
        raise PayloadError.empty()

    try:
        data = await request.body()
    except (ClientDisconnect, OSError) as e:
        raise PayloadError.read_failed(e) from e

    if not data:
        raise PayloadError.empty()

    logger.debug(f"Read {len(data)} bytes from request body")
    return data
