# localnetviewer/main.py

import os
import socket
import threading
import webbrowser

import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse

from localnetviewer.api import files, network, settings
from localnetviewer.api.network import server_url
from localnetviewer.cert_manager.cert_manager import ensure_https_cert
from localnetviewer.config import get_settings

VERSION = "1.0"

app = FastAPI(title="LocalNetViewer")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"]
)

app.include_router(files.router, prefix="/api/files")
app.include_router(settings.router, prefix="/api/settings")
app.include_router(network.router, prefix="/api/network")

@app.get("/")
@app.get("/{full_path:path}")
def frontend(full_path: str = ""):
    if full_path == "api" or full_path.startswith("api/"):
        raise HTTPException(404, detail="Not Found")

    static_dir = os.path.abspath(get_settings().get("static_dir") or "wwwroot")
    if os.path.isdir(static_dir):
        candidate = os.path.abspath(os.path.join(static_dir, full_path))
        if full_path and candidate.startswith(static_dir + os.sep) and os.path.isfile(candidate):
            return FileResponse(candidate)
        # client-side routing
        index = os.path.join(static_dir, "index.html")
        if os.path.isfile(index):
            return FileResponse(index)

    if not full_path:
        return {"status": "running", "version": VERSION}
    raise HTTPException(404, detail="Not Found")

# check whether the port is taken
def is_port_in_use(port):
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        return s.connect_ex(("localhost", port)) == 0

def ask_for_new_port(current_port):
    print(f"\n⚠️ Port {current_port} is already in use.")
    choice = input("Use the next port (+1)? [Y/n] or enter a port number: ").strip()

    if choice.lower() == 'n':
        print("Aborting start-up.")
        raise SystemExit(1)
    elif choice.isdigit():
        return int(choice)
    else:
        return current_port + 1

def main():
    config = get_settings()
    port = config["port"]
    while is_port_in_use(port):
        port = ask_for_new_port(port)
    config["port"] = port

    scheme = "http"
    ssl_options = {}
    if config.get("https_enabled", False):
        cert = config.get("cert_path", "cert.pem")
        key = config.get("key_path", "key.pem")
        ensure_https_cert(cert, key)
        scheme = "https"
        ssl_options = {"ssl_certfile": cert, "ssl_keyfile": key}

    print(f"📡 LocalNetViewer on {server_url(config)}")
    if config.get("open_browser", True):
        threading.Timer(1.0, webbrowser.open, args=[f"{scheme}://localhost:{port}"]).start()

    uvicorn.run(app, host=config.get("host", "0.0.0.0"), port=port, **ssl_options)

if __name__ == "__main__":
    main()
