"""Point configuration at a throwaway data directory before musicbox is imported."""

import os
import tempfile
from pathlib import Path

_ROOT = Path(tempfile.mkdtemp(prefix="musicbox-tests-"))

os.environ["DATA_DIR"] = str(_ROOT / "data")
os.environ["UPLOADS_DIR"] = str(_ROOT / "uploads")
os.environ.pop("DATABASE_URL", None)
os.environ["JWT_SECRET"] = "test-signing-secret"
os.environ["ADMIN_USERNAME"] = "admin"
os.environ["ADMIN_PASSWORD"] = "admin-test-password"
# Lowest cost bcrypt allows; keeps the suite fast.
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["APP_ENV"] = "test"
os.environ["RELEASE"] = "v-test"
