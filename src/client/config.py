"""Client configuration from environment variables."""

import os
from pathlib import Path

API_BASE_URL = os.getenv("WELLNESS_API_URL", "http://localhost:8000")
API_TIMEOUT_SECONDS = 10.0

CREDENTIALS_PATH = Path(
    os.getenv("WELLNESS_CREDENTIALS_PATH", str(Path.home() / ".wellness" / "credentials.json"))
)

# Editor auto-save quiet period
AUTO_SAVE_DELAY_SECONDS = 5.0
