# config.py
import os
import secrets
from dotenv import load_dotenv

load_dotenv()

# Optional. Without it GitHub applies the unauthenticated search quota.
GITHUB_TOKEN = os.getenv("GITHUB_TOKEN") or os.getenv("GITHUB_API_TOKEN")

HOST = os.getenv("HOST", "127.0.0.1")
PORT = int(os.getenv("PORT", "3001"))

# Signs the session cookie that ties a browser to its explorer session.
SECRET_KEY = os.getenv("SECRET_KEY") or secrets.token_hex(32)

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

OPEN_BROWSER = os.getenv("OPEN_BROWSER", "").lower() in ("1", "true", "yes")

# When set, `python -m repo_explorer` searches through this running server.
API_URL = os.getenv("API_URL")
