from fastapi import Request, HTTPException
from localnetviewer.config import get_settings

def client_ip(request: Request) -> str:
    return request.client.host if request.client else "unknown"

def verify_request(request: Request):
    config = get_settings()
    ip = client_ip(request)
    allowed_ips = config.get("allowed_ips", [])
    access_password = config.get("access_password", "")
    auth = request.headers.get("Authorization")

    if ip in allowed_ips:
        # allow-listed IPs skip the password
        return

    if access_password and auth != access_password:
        raise HTTPException(403, detail=f"Unauthorized (IP {ip} is not allow-listed and the password is wrong)")
