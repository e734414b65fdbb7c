"""Test environment: in-memory store, fast bcrypt, no log files, uploads under a temp dir.

Set before any profilehub import because settings are read once at import time.
"""

import os
import tempfile

_UPLOAD_ROOT = tempfile.mkdtemp(prefix="profilehub-tests-")

os.environ["APP_ENV"] = "dev"
os.environ["USER_STORE"] = "memory"
os.environ["LOG_TO_FILES"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["UPLOAD_DIR"] = os.path.join(_UPLOAD_ROOT, "uploads")
os.environ["FILES_DIR"] = os.path.join(_UPLOAD_ROOT, "files")
os.environ["COVERS_DIR"] = os.path.join(_UPLOAD_ROOT, "covers")
