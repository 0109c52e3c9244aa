# localnetviewer/api/network.py

from fastapi import APIRouter
from localnetviewer.cert_manager.cert_manager import get_local_ip
from localnetviewer.config import get_settings

router = APIRouter()

def server_url(config=None):
    config = config or get_settings()
    scheme = "https" if config.get("https_enabled", False) else "http"
    return f"{scheme}://{get_local_ip()}:{config['port']}"

@router.get("/url")
def get_server_url():
    return server_url()
