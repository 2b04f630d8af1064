"""Application configuration"""
from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Literal, Optional


class Settings(BaseSettings):
    """Application settings

    Nothing here is required at startup so the health check stays up even
    when email delivery is misconfigured. Missing values are reported by the
    operation that needs them.
    """

    # reCAPTCHA v3
    recaptcha_secret: str = ""
    recaptcha_verify_url: str = "https://www.google.com/recaptcha/api/siteverify"
    recaptcha_min_score: float = 0.5
    recaptcha_expected_action: Optional[str] = None
    # Returns score/action to the browser; operator debugging only
    expose_bot_score: bool = False

    # Email delivery
    email_transport: Literal["resend", "smtp"] = "resend"
    email_format: Literal["html", "text"] = "html"
    from_email: str = "Formulario Web <onboarding@resend.dev>"
    to_email: str = ""

    # Resend
    resend_api_key: str = ""
    resend_api_url: str = "https://api.resend.com/emails"

    # SMTP relay
    smtp_host: str = ""
    smtp_port: int = 587
    smtp_secure: bool = False  # implicit TLS, usually port 465
    smtp_user: str = ""
    smtp_pass: str = ""
    smtp_timeout: float = 20.0

    # Outbound HTTP (siteverify and Resend)
    http_timeout: float = 20.0

    # Application
    environment: str = "development"
    port: int = 10000
    cors_origins: list[str] = ["*"]

    class Config:
        env_file = ".env"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
