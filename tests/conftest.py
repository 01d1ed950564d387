"""
Shared pytest setup: keep captured images out of the working tree.
"""

import os
import tempfile

os.environ.setdefault("IMAGE_DIR", tempfile.mkdtemp(prefix="shot-api-test-"))
os.environ.setdefault("API_KEY", "")
os.environ.setdefault("UPLOAD_URL", "")
