# localnetviewer/api/settings.py

from fastapi import APIRouter, Body, Request, HTTPException
from localnetviewer.core import settings_manager
from localnetviewer.core.logger import log_access
from localnetviewer.core.models import ImagePageMode
from localnetviewer.core.security import client_ip, verify_request

router = APIRouter()

@router.get("/position")
def get_position(request: Request):
    verify_request(request)
    return settings_manager.get_position()

@router.patch("/position")
def patch_position(request: Request, position: str = Body(...)):
    ip = client_ip(request)
    verify_request(request)

    try:
        settings_manager.set_position(position)
    except OSError as e:
        log_access(ip, "SETTINGS_POSITION", position, False)
        raise HTTPException(500, detail=f"Failed to save settings: {e}")
    log_access(ip, "SETTINGS_POSITION", position, True)
    return {"status": "success"}

@router.get("/imagePageMode")
def get_image_page_mode(request: Request):
    verify_request(request)
    return int(settings_manager.get_image_page_mode())

@router.patch("/imagePageMode")
def patch_image_page_mode(request: Request, image_page_mode: ImagePageMode = Body(...)):
    ip = client_ip(request)
    verify_request(request)

    try:
        settings_manager.set_image_page_mode(image_page_mode)
    except OSError as e:
        log_access(ip, "SETTINGS_IMAGE_PAGE_MODE", str(int(image_page_mode)), False)
        raise HTTPException(500, detail=f"Failed to save settings: {e}")
    log_access(ip, "SETTINGS_IMAGE_PAGE_MODE", str(int(image_page_mode)), True)
    return {"status": "success"}
