from typing import List, Optional
from pydantic import Field
from pydantic_settings import BaseSettings
import os
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseSettings):
    # PostgreSQL Configuration
    postgres_user: str = Field(default="admin", env="POSTGRES_USER")
    postgres_password: str = Field(default="admin", env="POSTGRES_PASSWORD")
    postgres_db: str = Field(default="swipematch", env="POSTGRES_DB")
    postgres_host: str = Field(default="db", env="POSTGRES_HOST")
    postgres_port: int = Field(default=5432, env="POSTGRES_PORT")

    # Full URL override (e.g. sqlite+aiosqlite:///./dev.db for local runs)
    database_url_override: Optional[str] = Field(default=None, alias="DATABASE_URL")

    # Application Configuration
    app_env: str = Field(default="dev", env="APP_ENV")
    api_port: int = Field(default=8000, env="API_PORT")

    # Candidate listing
    candidate_page_size: int = Field(default=10, env="CANDIDATE_PAGE_SIZE")
    candidate_page_max: int = Field(default=50, env="CANDIDATE_PAGE_MAX")

    @property
    def database_url(self) -> str:
        if self.database_url_override:
            return self.database_url_override
        return f"postgresql+asyncpg://{self.postgres_user}:{self.postgres_password}@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"

    # CORS - allow frontend origins (filter out None values)
    allowed_origins: List[str] = [
        origin for origin in [
            "http://localhost:3000",
            "http://localhost:8080",
            os.getenv("FRONTEND_URL")
        ] if origin is not None
    ]

    class Config:
        env_file = ".env"
        extra = "ignore"
        populate_by_name = True


settings = Settings()
