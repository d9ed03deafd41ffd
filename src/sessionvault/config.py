from pydantic import field_validator
from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str  # e.g. mongodb://localhost:27017/sessionvault
    host: str = "127.0.0.1"
    port: int = 5001
    debug: bool = False
    cors_origins: list[str] = []
    forwarded_allow_ips: str = "127.0.0.1"  # Proxies trusted for X-Forwarded-* headers
    # Dashboard account, created on first start and re-hashed when the password changes
    admin_username: str = "admin"
    admin_password: str = "admin"
    # Build metadata injected during Docker build via environment variables
    git_commit_hash: str = "unknown"
    build_time: str = "unknown"

    model_config = {
        "env_file": [".env"],
        "env_prefix": "SESSIONVAULT_",
        "extra": "ignore",
    }

    @field_validator("admin_password")
    @classmethod
    def _check_admin_password(cls, password: str) -> str:
        if len(password) < 2:
            raise ValueError("admin password must be at least 2 characters long")
        if any(char.isspace() for char in password):
            raise ValueError("admin password cannot contain whitespace characters")
        return password
