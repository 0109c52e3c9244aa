# localnetviewer/core/thumbnail.py

import os
from io import BytesIO
from typing import Tuple

import fitz  # PyMuPDF
from PIL import Image, ImageOps, UnidentifiedImageError

from localnetviewer.core.file_type import FileType, file_type_of

THUMBNAIL_WIDTH = 200
JPEG_QUALITY = 85


class ThumbnailError(Exception):
    pass


def generate_image_thumbnail(target_path: str) -> bytes:
    """Scale an image to THUMBNAIL_WIDTH px wide and return it as JPEG."""
    try:
        with Image.open(target_path) as img:
            img = ImageOps.exif_transpose(img)
            if img.mode != "RGB":
                img = img.convert("RGB")
            width, height = img.size
            new_height = max(1, round(height * THUMBNAIL_WIDTH / width))
            thumb = img.resize((THUMBNAIL_WIDTH, new_height), Image.LANCZOS)
    except (FileNotFoundError, PermissionError):
        raise
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
        raise ThumbnailError(f"Cannot read image {target_path}: {e}")

    buf = BytesIO()
    thumb.save(buf, format="JPEG", quality=JPEG_QUALITY)
    return buf.getvalue()


def generate_pdf_thumbnail(target_path: str) -> bytes:
    """Return a new PDF document holding only the first page of *target_path*."""
    if not os.path.isfile(target_path):
        raise FileNotFoundError(f"PDF file not found: {target_path}")

    try:
        src = fitz.open(target_path)
    except RuntimeError as e:
        raise ThumbnailError(f"Cannot read PDF {target_path}: {e}")

    try:
        if src.page_count == 0:
            raise ThumbnailError(f"PDF has no pages: {target_path}")
        out = fitz.open()
        try:
            out.insert_pdf(src, from_page=0, to_page=0)
            return out.tobytes()
        finally:
            out.close()
    finally:
        src.close()


def generate_thumbnail(target_path: str) -> Tuple[bytes, str]:
    file_type = file_type_of(target_path)
    if file_type == FileType.IMAGE:
        return generate_image_thumbnail(target_path), "image/jpeg"
    if file_type == FileType.PDF:
        return generate_pdf_thumbnail(target_path), "application/pdf"
    raise ThumbnailError(f"No thumbnail available for {os.path.basename(target_path)}")
