# app/config.py
import os
from pydantic import BaseModel
from dotenv import load_dotenv

load_dotenv()  # Load environment variables from .env file


def _split_csv(raw: str) -> list[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


class Settings(BaseModel):
    # General app settings
    APP_NAME: str = "Conduit API"
    env: str = os.getenv("ENV", "dev")

    # Host & Port settings
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8000"))

    # CORS origins for frontend (comma-separated in CORS_ORIGINS)
    CORS_ORIGINS: list[str] = _split_csv(
        os.getenv(
            "CORS_ORIGINS",
            "http://localhost:4100,http://127.0.0.1:4100,http://localhost:3000,http://127.0.0.1:3000",
        )
    )

    # Image served for profiles that never uploaded one
    DEFAULT_PROFILE_IMAGE: str = os.getenv(
        "DEFAULT_PROFILE_IMAGE",
        "https://static.productionready.io/images/smiley-cyrus.jpg",
    )

settings = Settings()  # Instantiate configuration
