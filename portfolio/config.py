"""Application configuration and constants."""
import os
from pathlib import Path

# Directory paths
BASE_DIR = Path(__file__).resolve().parent.parent
DATABASE_PATH = Path(os.environ.get("PORTFOLIO_DATABASE_PATH", str(BASE_DIR / "portfolio.db")))

# Logging
LOG_LEVEL = os.environ.get("PORTFOLIO_LOG_LEVEL", "INFO").upper()

# Object storage (S3 or any S3-compatible endpoint such as MinIO)
S3_BUCKET = os.environ.get("S3_BUCKET", "")
S3_REGION = os.environ.get("S3_REGION", "us-east-1")
S3_ENDPOINT = os.environ.get("S3_ENDPOINT") or None
S3_ACCESS_KEY = os.environ.get("S3_ACCESS_KEY") or None
S3_SECRET_KEY = os.environ.get("S3_SECRET_KEY") or None

# Lifetime of presigned upload URLs, in seconds
UPLOAD_URL_EXPIRES = int(os.environ.get("UPLOAD_URL_EXPIRES", "60"))

# Allowed upload types
ALLOWED_IMAGE_TYPES = {"image/jpeg", "image/png", "image/gif", "image/webp", "image/avif"}

# Identity headers set by the authenticating proxy in front of the app
PRINCIPAL_ID_HEADER = "X-Principal-Id"
PRINCIPAL_AVATAR_HEADER = "X-Principal-Avatar"

# Shared secret for identity-provider webhooks (account deletion)
HOOK_API_KEY = os.environ.get("PORTFOLIO_HOOK_API_KEY", None)

# View paths whose cached render is dropped after a mutation
DASHBOARD_PATH = "/dashboard"
ALBUM_PATH = "/album/{album_id}"

# Profile defaults
DEFAULT_BIO = "Welcome to my profile!"
