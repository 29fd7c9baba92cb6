from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    # -------------------------------------------------
    # General
    # -------------------------------------------------
    PROJECT_NAME: str = "PropertyHub API"
    ENV: str = "development"

    # -------------------------------------------------
    # Frontend
    # -------------------------------------------------
    FRONTEND_URL: str = "http://localhost:8080"
    SIGN_IN_PATH: str = "/auth"

    # -------------------------------------------------
    # CORS (auto-built below)
    # -------------------------------------------------
    BACKEND_CORS_ORIGINS: List[str] = []

    # -------------------------------------------------
    # Data backend
    #   supabase → PostgREST tables via the service-role client
    #   memory   → in-process tables (local development, tests)
    # -------------------------------------------------
    DATA_BACKEND: str = "supabase"

    # -------------------------------------------------
    # Supabase (Primary DB & Auth)
    # -------------------------------------------------
    SUPABASE_URL: Optional[str] = None
    SUPABASE_ANON_KEY: Optional[str] = None
    SUPABASE_SERVICE_ROLE_KEY: Optional[str] = None

    # -------------------------------------------------
    # Identity document storage (S3)
    # -------------------------------------------------
    ID_DOCUMENTS_BUCKET: Optional[str] = None
    AWS_ACCESS_KEY_ID: Optional[str] = None
    AWS_SECRET_ACCESS_KEY: Optional[str] = None
    AWS_REGION: str = "us-east-2"
    ID_DOCUMENT_URL_EXPIRY_SECONDS: int = 3600

    # -------------------------------------------------
    # SMTP Email Notifications
    # -------------------------------------------------
    SMTP_HOST: Optional[str] = None
    SMTP_PORT: Optional[int] = None
    SMTP_USER: Optional[str] = None
    SMTP_PASS: Optional[str] = None
    SMTP_FROM: Optional[str] = None

    # -------------------------------------------------
    # Signup rules
    # -------------------------------------------------
    MIN_SIGNUP_AGE: int = 18
    MIN_PASSWORD_LENGTH: int = 6

    # -------------------------------------------------
    # Dashboard aggregation
    # -------------------------------------------------
    DASHBOARD_MAX_WORKERS: int = Field(4, description="Threads used for concurrent dashboard counts")

    # -------------------------------------------------
    # Model Config
    # -------------------------------------------------
    model_config = SettingsConfigDict(case_sensitive=True)


# Instantiate settings
settings = Settings()

# -------------------------------------------------
# Build CORS list dynamically after loading settings
# -------------------------------------------------
cors_origins = list(settings.BACKEND_CORS_ORIGINS)

frontend = settings.FRONTEND_URL
if not frontend.startswith("http"):
    frontend = f"https://{frontend}"
cors_origins.append(frontend.rstrip("/"))

settings.BACKEND_CORS_ORIGINS = sorted(set(o.rstrip("/") for o in cors_origins))
