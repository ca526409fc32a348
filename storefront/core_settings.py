from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Optional

class Settings(BaseSettings):
    POSTGRES_HOST: str = "postgres"
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str = "zeynix"
    POSTGRES_USER: str = "zeynix"
    POSTGRES_PASSWORD: str = "zeynix"
    # Overrides the Postgres URL when set (e.g. sqlite:///./storefront.db for local runs)
    DATABASE_URL: Optional[str] = None
    RUN_MIGRATIONS: bool = True

    JWT_SECRET: str = "change-me"
    JWT_ALG: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7
    # Legacy admin path: trust ?userId= when no token is sent
    ALLOW_USER_ID_PARAM_AUTH: bool = False

    ORDER_NUMBER_PREFIX: str = "ZNX"
    EXPECTED_DELIVERY_MINUTES: int = 45
    DEFAULT_PAYMENT_METHOD: str = "razorpay"
    ENFORCE_SERVER_PRICING: bool = True
    PRICE_TOLERANCE: float = 0.01
    ENFORCE_STATUS_TRANSITIONS: bool = True

    RAZORPAY_KEY_ID: str = ""
    RAZORPAY_KEY_SECRET: str = ""
    RAZORPAY_API_URL: str = "https://api.razorpay.com/v1"
    PAYMENT_GATEWAY_TIMEOUT: float = 10.0
    PAYMENT_CURRENCY: str = "INR"

    SERVICE_VERSION: str = "1.0.0"
    LOG_LEVEL: str = "INFO"
    EXPOSE_ERROR_DETAILS: bool = False

    class Config:
        env_file = ".env"

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"postgresql+psycopg2://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

@lru_cache
def get_settings() -> Settings:
    return Settings()
