# localnetviewer/api/files.py
from fastapi import APIRouter, Request, HTTPException, Response, Header
from fastapi.responses import FileResponse, StreamingResponse
from typing import List, Optional
import os

from localnetviewer.core.file_type import get_mime_type
from localnetviewer.core.logger import log_access
from localnetviewer.core.models import FileInfo
from localnetviewer.core.position_manager import (
    InvalidPositionError,
    PositionNotFoundError,
    get_child_infos,
    get_path_by_position,
)
from localnetviewer.core.security import client_ip, verify_request
from localnetviewer.core.thumbnail import ThumbnailError, generate_thumbnail

router = APIRouter()

CHUNK_SIZE = 64 * 1024


def to_http_error(e: Exception) -> HTTPException:
    if isinstance(e, HTTPException):
        return e
    if isinstance(e, InvalidPositionError):
        return HTTPException(400, detail=str(e))
    if isinstance(e, (PositionNotFoundError, FileNotFoundError)):
        return HTTPException(404, detail=str(e) or "Not found")
    if isinstance(e, PermissionError):
        return HTTPException(403, detail="Access denied")
    if isinstance(e, ThumbnailError):
        return HTTPException(415, detail=str(e))
    return HTTPException(500, detail=str(e))


def resolve_file(request: Request, action: str, position: str) -> str:
    """Resolve *position* to an existing regular file or raise an HTTPException."""
    try:
        verify_request(request)
        path = get_path_by_position(position)
        if not os.path.isfile(path):
            raise HTTPException(404, detail="File not found")
        return path
    except (HTTPException, InvalidPositionError, PositionNotFoundError, OSError) as e:
        log_access(client_ip(request), action, position, success=False)
        raise to_http_error(e)


def parse_range(range_header: str, file_size: int):
    """Parse ``bytes=start-end`` (also ``start-`` and ``-suffix``) into inclusive bounds."""
    try:
        unit, range_str = range_header.strip().split("=", 1)
        if unit.strip().lower() != "bytes":
            raise ValueError(unit)
        # only the first range of a multi-range request is served
        start_str, end_str = range_str.split(",")[0].strip().split("-")
        if start_str:
            start = int(start_str)
            end = int(end_str) if end_str else file_size - 1
        else:
            suffix = int(end_str)
            if suffix <= 0:
                raise ValueError(range_str)
            start = max(0, file_size - suffix)
            end = file_size - 1
    except ValueError:
        raise HTTPException(416, detail="Invalid Range header",
                            headers={"Content-Range": f"bytes */{file_size}"})

    end = min(end, file_size - 1)
    if start >= file_size or start > end:
        raise HTTPException(416, detail="Range start is beyond the end of the file",
                            headers={"Content-Range": f"bytes */{file_size}"})
    return start, end


def file_stream(path: str, start: int, length: int):
    with open(path, "rb") as f:
        f.seek(start)
        remaining = length
        while remaining > 0:
            chunk = f.read(min(CHUNK_SIZE, remaining))
            if not chunk:
                break
            remaining -= len(chunk)
            yield chunk


@router.get("", response_model=List[FileInfo])
def list_drives(request: Request):
    ip = client_ip(request)
    try:
        verify_request(request)
        result = get_child_infos()
    except (HTTPException, OSError) as e:
        log_access(ip, "LIST", "-", False)
        raise to_http_error(e)
    log_access(ip, "LIST", "-", True)
    return result


@router.get("/{position}/child", response_model=List[FileInfo])
def list_children(request: Request, position: str):
    ip = client_ip(request)
    try:
        verify_request(request)
        result = get_child_infos(position)
    except (HTTPException, InvalidPositionError, PositionNotFoundError, OSError) as e:
        log_access(ip, "LIST", position, False)
        raise to_http_error(e)
    log_access(ip, "LIST", position, True)
    return result


@router.get("/{position}/path")
def get_file_path(request: Request, position: str):
    ip = client_ip(request)
    try:
        verify_request(request)
        path = get_path_by_position(position)
    except (HTTPException, InvalidPositionError, PositionNotFoundError, OSError) as e:
        log_access(ip, "PATH", position, False)
        raise to_http_error(e)
    log_access(ip, "PATH", position, True)
    return path


@router.get("/{position}/pdf")
def get_pdf(request: Request, position: str):
    path = resolve_file(request, "PDF", position)
    log_access(client_ip(request), "PDF", position, True)
    return FileResponse(path, media_type="application/pdf",
                        filename=os.path.basename(path), content_disposition_type="inline")


@router.get("/{position}/video")
def get_video(
    request: Request,
    position: str,
    range: Optional[str] = Header(None)
):
    ip = client_ip(request)
    action = "VIDEO"
    path = resolve_file(request, action, position)
    media_type = get_mime_type(path)
    file_size = os.path.getsize(path)

    if not range:
        log_access(ip, action, position, success=True)
        return FileResponse(path, media_type=media_type,
                            headers={"Accept-Ranges": "bytes"})

    try:
        start, end = parse_range(range, file_size)
    except HTTPException:
        log_access(ip, action, position, success=False)
        raise

    chunk_size = end - start + 1
    headers = {
        "Content-Range": f"bytes {start}-{end}/{file_size}",
        "Accept-Ranges": "bytes",
        "Content-Length": str(chunk_size),
    }

    log_access(ip, action, position, success=True)
    return StreamingResponse(file_stream(path, start, chunk_size), status_code=206,
                             headers=headers, media_type=media_type)


@router.get("/{position}/thumbnail")
def get_thumbnail(request: Request, position: str):
    ip = client_ip(request)
    action = "THUMBNAIL"
    path = resolve_file(request, action, position)
    try:
        content, media_type = generate_thumbnail(path)
    except (ThumbnailError, OSError) as e:
        log_access(ip, action, position, success=False)
        raise to_http_error(e)

    log_access(ip, action, position, success=True)
    return Response(content=content, media_type=media_type)


@router.get("/{position}")
def download_file(request: Request, position: str):
    path = resolve_file(request, "DOWNLOAD", position)
    log_access(client_ip(request), "DOWNLOAD", position, True)
    return FileResponse(
        path,
        filename=os.path.basename(path),
        media_type="application/octet-stream"
    )
