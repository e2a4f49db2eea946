# patoshub/config.py

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(name)
    return value if value else default


class Settings(BaseModel):
    """Process-wide settings, read once from the environment at startup."""

    database_url: Optional[str] = Field(default_factory=lambda: _env("DATABASE_URL"))
    jwt_secret: str = Field(default_factory=lambda: _env("JWT_SECRET", "change-me-later"))
    port: int = Field(default_factory=lambda: int(_env("PORT", "3000")))
    log_level: str = Field(default_factory=lambda: _env("LOG_LEVEL", "INFO"))
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    upload_dir: str = Field(default_factory=lambda: _env("UPLOAD_DIR", "uploads"))
    admin_password: str = Field(default_factory=lambda: _env("ADMIN_PASSWORD", "admin123"))

    cloudinary_cloud_name: Optional[str] = Field(default_factory=lambda: _env("CLOUDINARY_CLOUD_NAME"))
    cloudinary_api_key: Optional[str] = Field(default_factory=lambda: _env("CLOUDINARY_API_KEY"))
    cloudinary_api_secret: Optional[str] = Field(default_factory=lambda: _env("CLOUDINARY_API_SECRET"))

    imagekit_public_key: Optional[str] = Field(default_factory=lambda: _env("IMAGEKIT_PUBLIC_KEY"))
    imagekit_private_key: Optional[str] = Field(default_factory=lambda: _env("IMAGEKIT_PRIVATE_KEY"))
    imagekit_url_endpoint: Optional[str] = Field(default_factory=lambda: _env("IMAGEKIT_URL_ENDPOINT"))

    @property
    def imagekit_configured(self) -> bool:
        return all([self.imagekit_public_key, self.imagekit_private_key, self.imagekit_url_endpoint])

    @property
    def cloudinary_configured(self) -> bool:
        return all([self.cloudinary_cloud_name, self.cloudinary_api_key, self.cloudinary_api_secret])

    @property
    def sqlalchemy_url(self) -> Optional[str]:
        # Heroku/Render style URLs are not accepted by SQLAlchemy 2
        url = self.database_url
        if url and url.startswith("postgres://"):
            url = "postgresql://" + url[len("postgres://"):]
        return url
