from datetime import datetime
import os

from localnetviewer.config import get_settings

def get_log_path():
    today = datetime.now().strftime("%Y-%m-%d")
    log_dir = get_settings().get("log_dir") or "logs"
    return os.path.join(log_dir, f"access-{today}.log")

def log_access(ip: str, action: str, target: str, success: bool = True):
    timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    result = "✅" if success else "❌"
    log_line = f"[{timestamp}] {ip} {action} {target or '-'} {result}\n"

    try:
        log_path = get_log_path()
        log_dir = os.path.dirname(log_path)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        with open(log_path, "a", encoding="utf-8") as f:
            f.write(log_line)
    except OSError as e:
        print("⚠️ Failed to write access log:", e)
