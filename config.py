import os

from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL")

ACTIVE_PROFILE_COOKIE = os.getenv("ACTIVE_PROFILE_COOKIE", "activeProfileId")
COOKIE_MAX_AGE = int(os.getenv("COOKIE_MAX_AGE", str(60 * 60 * 24 * 365)))

DEFAULT_PROFILE_NAME = "Default"
DEFAULT_PROFILE_COLOR = "#0ea5e9"

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

STATS_DAYS = int(os.getenv("STATS_DAYS", "30"))
HISTORY_DAYS = 30

CORS_ORIGINS = [
    o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()
]
