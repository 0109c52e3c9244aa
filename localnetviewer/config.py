import json
import os
import tempfile
import threading

CONFIG_PATH = "config.json"

DEFAULTS = {
    "host": "0.0.0.0",
    "port": 5197,
    "roots": [],
    "static_dir": "wwwroot",
    "open_browser": True,
    "access_password": "",
    "allowed_ips": ["127.0.0.1"],
    "https_enabled": False,
    "cert_path": "cert.pem",
    "key_path": "key.pem",
    "log_dir": "logs",
    "position": "",
    "image_page_mode": 0
}


# guards read-merge-write; re-entrant so save_settings can run inside it
_lock = threading.RLock()

def get_settings():
    with _lock:
        config = {}
        read_ok = True
        if os.path.exists(CONFIG_PATH):
            try:
                with open(CONFIG_PATH, "r", encoding="utf-8") as f:
                    config = json.load(f)
            except (OSError, ValueError):
                print(f"⚠️ {CONFIG_PATH} could not be read, using defaults")
                config = {}
                read_ok = False
            if not isinstance(config, dict):
                print(f"⚠️ {CONFIG_PATH} is not a JSON object, using defaults")
                config = {}
                read_ok = False

        # merge and write back; a file we could not parse is left alone
        config = {**DEFAULTS, **config}
        if read_ok:
            save_settings(config)
        return config

def update_settings(**values):
    with _lock:
        config = get_settings()
        config.update(values)
        save_settings(config)
        return config

def save_settings(data):
    with _lock:
        directory = os.path.dirname(os.path.abspath(CONFIG_PATH))
        fd, tmp_path = tempfile.mkstemp(prefix=".config-", suffix=".tmp", dir=directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, CONFIG_PATH)
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise
