from functools import lru_cache
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field

ENV_FILE_PATH = Path(".env")


class Settings(BaseModel):
    env: str = Field(default="dev", alias="ENV")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    api_prefix: str = Field(default="/api", alias="API_PREFIX")
    cors_origins: str = Field(default="*", alias="CORS_ORIGINS")

    db_backend: str = Field(default="postgres", alias="DB_BACKEND")
    database_url: str = Field(default="", alias="DATABASE_URL")
    sqlite_path: str = Field(default="dev.sqlite3", alias="SQLITE_PATH")

    postgres_db: str = Field(default="bus_reservation", alias="POSTGRES_DB")
    postgres_user: str = Field(default="bus", alias="POSTGRES_USER")
    postgres_password: str = Field(default="bus", alias="POSTGRES_PASSWORD")
    postgres_host: str = Field(default="localhost", alias="POSTGRES_HOST")
    postgres_port: int = Field(default=5432, alias="POSTGRES_PORT")

    jwt_secret: str = Field(default="secret", alias="JWT_SECRET")
    jwt_expire_min: int = Field(default=720, alias="JWT_EXPIRE_MIN")

    default_admin_login: str = Field(default="admin", alias="DEFAULT_ADMIN_LOGIN")
    default_admin_password: str = Field(default="admin123", alias="DEFAULT_ADMIN_PASSWORD")

    # Reject bookings whose amount differs from seats * schedule price
    verify_booking_amount: bool = Field(default=True, alias="VERIFY_BOOKING_AMOUNT")

    class Config:
        populate_by_name = True

    @property
    def sqlalchemy_url(self) -> str:
        if self.database_url:
            return self.database_url
        if self.db_backend == "sqlite":
            return f"sqlite+pysqlite:///{self.sqlite_path}"
        if self.db_backend != "postgres":
            raise ValueError(f"Unsupported DB_BACKEND: {self.db_backend}")
        return (
            f"postgresql+psycopg2://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    load_dotenv(dotenv_path=ENV_FILE_PATH, override=False)
    return Settings(**os.environ)
