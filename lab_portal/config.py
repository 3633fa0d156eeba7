from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    # Database
    database_url: str = "sqlite:///./lab_portal.db"

    # Security
    secret_key: str = "your-super-strong-secret-key-please-change-me"
    algorithm: str = "HS256"
    access_token_expire_days: int = 7
    super_admin_key: str = "supersecretadminkey"
    password_hash_iterations: int = 200_000

    # Federated sign-in
    google_client_id: Optional[str] = None

    # App
    app_name: str = "Lab Portal"
    cors_origins: List[str] = ["*"]
    log_level: str = "INFO"
    debug: bool = False

    class Config:
        env_file = ".env"


settings = Settings()
