import os
from typing import Literal

from dotenv import load_dotenv
from pydantic import ConfigDict
from pydantic_settings import BaseSettings

# Load .env file automatically
load_dotenv()


class Settings(BaseSettings):
    """PayPal NVP client settings loaded from environment variables."""

    # API credentials (3-token signature auth)
    PAYPAL_USERNAME: str
    PAYPAL_PASSWORD: str = ""
    PAYPAL_SIGNATURE: str = ""
    PAYPAL_SANDBOX: bool = True

    # App settings
    ENVIRONMENT: Literal["development", "test", "production"] = "development"
    LOG_LEVEL: str = "INFO"

    model_config = ConfigDict(env_file=".env", case_sensitive=True)

    def __init__(self, **kwargs):
        # Check for credentials before calling parent constructor
        if "PAYPAL_USERNAME" not in kwargs and not os.getenv("PAYPAL_USERNAME"):
            raise RuntimeError(
                "PAYPAL_USERNAME not set; create .env or export the variable"
            )
        super().__init__(**kwargs)
