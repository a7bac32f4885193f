"""
PartnerPay Configuration Module

Loads environment variables for backend configuration.
"""
from pydantic import BaseModel
from pydantic_settings import BaseSettings
from typing import Dict, Literal


class PartnerCredentialSettings(BaseModel):
    """Credential entry for one partner as supplied through settings."""
    partner_no: str
    password: str


def _default_partner_credentials() -> Dict[str, PartnerCredentialSettings]:
    return {
        "FAKEGOOGLE": PartnerCredentialSettings(partner_no="FG-00001", password="FAKEPASSWORD1234"),
        "FAKEPEOPLE": PartnerCredentialSettings(partner_no="FG-00002", password="FAKEPASSWORD4578"),
    }


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Notes:
    - Partner credentials are read once at startup and never mutated
    - PARTNER_CREDENTIALS may be supplied as a JSON object
    - The allowed timestamp skew is fixed and deliberately not a setting
    """

    app_name: str = "PartnerPay Transaction API"
    app_version: str = "0.1.0"

    # Demo Configuration
    demo_mode: bool = True
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Partner credential table (partner key -> partner number + secret)
    partner_credentials: Dict[str, PartnerCredentialSettings] = _default_partner_credentials()

    # HMAC key used to fingerprint partner passwords in logs
    log_redaction_secret: str = "log_redaction_key_demo_only_change_me"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
