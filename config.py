"""Configuration management for the listings backend."""

import os
from dataclasses import dataclass, field
from urllib.parse import quote_plus

from dotenv import load_dotenv

load_dotenv()


def _database_url_from_env() -> str:
    """Build the SQLAlchemy URL from DATABASE_URL or the DB_* variables."""
    url = os.getenv("DATABASE_URL")
    if url:
        return url

    server = os.getenv("DB_SERVER")
    if not server:
        return "sqlite:///./listings.db"

    user = quote_plus(os.getenv("DB_USER", ""))
    password = quote_plus(os.getenv("DB_PASS", ""))
    port = os.getenv("DB_PORT", "1433")
    name = os.getenv("DB_NAME", "")
    return f"mssql+pymssql://{user}:{password}@{server}:{port}/{name}"


def _blob_connection_string_from_env() -> str | None:
    """Connection string for the blob service, if any is configured."""
    conn = os.getenv("AZURE_STORAGE_CONNECTION_STRING")
    if conn:
        return conn

    account = os.getenv("AZURE_STORAGE_ACCOUNT")
    key = os.getenv("AZURE_STORAGE_KEY")
    if not account or not key:
        return None
    return (
        f"DefaultEndpointsProtocol=https;"
        f"AccountName={account};"
        f"AccountKey={key};"
        f"EndpointSuffix=core.windows.net"
    )


@dataclass
class DatabaseConfig:
    """SQL store configuration."""

    url: str = "sqlite:///./listings.db"
    echo: bool = False
    pool_size: int = 5
    max_overflow: int = 10
    pool_timeout: int = 30
    pool_recycle: int = 1800


@dataclass
class StorageConfig:
    """Blob storage configuration for listing images."""

    connection_string: str | None = None
    container: str = "property-images"


@dataclass
class AdminConfig:
    """Admin gate configuration."""

    password: str | None = None
    jwt_secret: str | None = None
    jwt_algorithm: str = "HS256"
    session_hours: float = 24.0


@dataclass
class UploadConfig:
    """Limits applied to image uploads before they reach the store."""

    max_images: int = 10
    max_image_bytes: int = 5 * 1024 * 1024


@dataclass
class Settings:
    """Main configuration for the listings backend."""

    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    admin: AdminConfig = field(default_factory=AdminConfig)
    uploads: UploadConfig = field(default_factory=UploadConfig)
    cors_origins: list[str] = field(default_factory=list)
    log_level: str = "INFO"
    log_format: str = "standard"
    port: int = 10000

    @classmethod
    def from_env(cls) -> "Settings":
        """Create settings from environment variables."""
        database = DatabaseConfig(
            url=_database_url_from_env(),
            echo=os.getenv("SQL_ECHO", "false").lower() == "true",
        )

        storage = StorageConfig(
            connection_string=_blob_connection_string_from_env(),
            container=os.getenv("AZURE_STORAGE_CONTAINER", "property-images"),
        )

        admin = AdminConfig(
            password=os.getenv("ADMIN_PASSWORD") or None,
            jwt_secret=os.getenv("JWT_SECRET") or None,
            session_hours=float(os.getenv("ADMIN_SESSION_HOURS", "24")),
        )

        uploads = UploadConfig(
            max_images=int(os.getenv("MAX_IMAGES", "10")),
            max_image_bytes=int(os.getenv("MAX_IMAGE_BYTES", str(5 * 1024 * 1024))),
        )

        origins = [o.strip() for o in os.getenv("CORS_ORIGINS", "").split(",") if o.strip()]

        return cls(
            database=database,
            storage=storage,
            admin=admin,
            uploads=uploads,
            cors_origins=origins,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard"),
            port=int(os.getenv("PORT", "10000")),
        )


settings = Settings.from_env()
