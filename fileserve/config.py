"""
Environment-driven settings. Read once at import time, after main.py has
loaded the .env file.
"""

import os


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings:
    CLAUDE_HOME = os.getenv("CLAUDE_HOME") or os.path.expanduser("~")
    REQUIRE_PROJECT_HISTORY = _flag("REQUIRE_PROJECT_HISTORY", "1")

    PREVIEW_MAX_BYTES = int(os.getenv("PREVIEW_MAX_BYTES", str(10 * 1024 * 1024)))
    BASE64_PREVIEW_MAX_BYTES = int(os.getenv("BASE64_PREVIEW_MAX_BYTES", str(1024 * 1024)))

    UPLOAD_MAX_BYTES = int(os.getenv("UPLOAD_MAX_BYTES", str(50 * 1024 * 1024)))
    UPLOAD_TEMP_DIRNAME = os.getenv("UPLOAD_TEMP_DIRNAME", ".claude-temp")

    LIST_STAT_CONCURRENCY = int(os.getenv("LIST_STAT_CONCURRENCY", "32"))

    CORS_ORIGINS = [
        o.strip() for o in os.getenv("CORS_ORIGINS", "http://localhost:5173").split(",") if o.strip()
    ]


settings = Settings()
