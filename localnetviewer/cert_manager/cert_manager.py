import os
import subprocess
import socket
import datetime
from OpenSSL import crypto

def get_local_ip():
    try:
        s = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        try:
            # no packet is sent; this only picks the outgoing interface
            s.connect(("8.8.8.8", 80))
            return s.getsockname()[0]
        finally:
            s.close()
    except OSError:
        return "127.0.0.1"

def cert_is_valid(cert_path: str, valid_days=7) -> bool:
    if not os.path.exists(cert_path):
        return False
    try:
        with open(cert_path, "rb") as f:
            cert_data = f.read()
        cert = crypto.load_certificate(crypto.FILETYPE_PEM, cert_data)
        expires = datetime.datetime.strptime(cert.get_notAfter().decode("ascii"), "%Y%m%d%H%M%SZ")
        now = datetime.datetime.now(datetime.timezone.utc).replace(tzinfo=None)
        return (expires - now).days >= valid_days
    except (OSError, ValueError, crypto.Error) as e:
        print(f"⚠️ Could not read certificate: {e}")
        return False

def ensure_https_cert(cert_path="cert.pem", key_path="key.pem"):
    if cert_is_valid(cert_path) and os.path.exists(key_path):
        return  # a valid certificate already exists

    ip = get_local_ip()
    print(f"🔐 Generating a self-signed HTTPS certificate for {ip} ...")

    cmd = [
        "openssl", "req", "-x509", "-newkey", "rsa:2048",
        "-keyout", key_path,
        "-out", cert_path,
        "-days", "365", "-nodes",
        "-subj", f"/CN={ip}"
    ]

    try:
        subprocess.run(cmd, check=True)
        print(f"✅ Certificate created: {cert_path} (valid for 365 days)")
    except (OSError, subprocess.CalledProcessError) as e:
        print("❌ Failed to generate certificate:", e)
        raise SystemExit(1)
