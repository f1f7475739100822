from typing import List, Optional

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.platform.constant.path import LOG_DIR as DEFAULT_LOG_DIR, resolve_env_file


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(resolve_env_file()),
        env_ignore_empty=True,
        extra='ignore',
    )

    # Service identity, stamped on log lines and trace resources
    SERVICE_NAME: str = 'seat-ledger'
    DEPLOY_ENV: str = 'local_dev'

    PROJECT_NAME: str = 'Seat Ledger'
    VERSION: str = '0.1.0'
    DEBUG: bool = True  # Set to False in production

    # Security
    SECRET_KEY: SecretStr = SecretStr('test_secret_key_change_in_production')

    # CORS
    BACKEND_CORS_ORIGINS: List[str] = []  # add your back-office URL here

    @field_validator('BACKEND_CORS_ORIGINS', mode='before')
    @classmethod
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, str) and not v.startswith('['):
            return [i.strip() for i in v.split(',') if i.strip()]
        elif isinstance(v, list):
            return v
        return []

    # PostgreSQL
    POSTGRES_SERVER: str = 'localhost'
    POSTGRES_USER: str = 'postgres'
    POSTGRES_PASSWORD: SecretStr = SecretStr('postgres')
    POSTGRES_DB: str = 'seat_ledger'
    POSTGRES_PORT: int = 5432

    @property
    def DATABASE_URL_ASYNC(self) -> str:
        password = self.POSTGRES_PASSWORD.get_secret_value()
        return f'postgresql+asyncpg://{self.POSTGRES_USER}:{password}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}'

    # Connection pool
    DB_POOL_SIZE: int = 10
    DB_POOL_MAX_OVERFLOW: int = 5
    DB_POOL_TIMEOUT: int = 30  # seconds
    DB_POOL_RECYCLE: int = 1800  # seconds
    DB_POOL_PRE_PING: bool = True

    # Logging
    LOG_DIR: str = str(DEFAULT_LOG_DIR)
    LOG_TIMEZONE: str = 'Asia/Ho_Chi_Minh'
    LOG_FILE_ENABLED: Optional[bool] = None  # None: follow DEBUG
    LOG_RETENTION: str = '7 days'

    # Tracing
    OTEL_EXPORTER_OTLP_ENDPOINT: Optional[str] = None
    OTEL_CONSOLE_EXPORT: bool = False
    OTEL_EXCLUDED_URLS: str = 'health'

    # Ledger
    PAYMENT_MISMATCH_TOLERANCE: int = 0  # currency units, amounts are whole dong

    @property
    def log_to_file(self) -> bool:
        return self.DEBUG if self.LOG_FILE_ENABLED is None else self.LOG_FILE_ENABLED


settings = Settings()  # type: ignore
