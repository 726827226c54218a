import os
from pathlib import Path

from dotenv import load_dotenv

ROOT_DIR = Path(__file__).resolve().parents[1]
load_dotenv(ROOT_DIR / ".env")


class Settings:
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./pathway.db")
    AUTO_CREATE_SCHEMA: bool = os.getenv("AUTO_CREATE_SCHEMA", "0") == "1"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    STRICT_CATALOG: bool = os.getenv("STRICT_CATALOG", "1") == "1"
    MAX_FOCUSED_HABITS: int = int(os.getenv("MAX_FOCUSED_HABITS", "2"))
    HABIT_PLAN_WEEKS: int = int(os.getenv("HABIT_PLAN_WEEKS", "7"))
    CORS_ORIGINS: list[str] = [
        item.strip()
        for item in os.getenv("CORS_ORIGINS", "*").split(",")
        if item.strip()
    ]


settings = Settings()
