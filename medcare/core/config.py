# medcare/core/config.py
import os
from pydantic import BaseModel
from dotenv import load_dotenv

load_dotenv()


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


class Settings(BaseModel):
    PROJECT_NAME: str = os.getenv("PROJECT_NAME", "MedCare Ledger")
    API_V1_STR: str = os.getenv("API_V1_STR", "/api")

    # ---------- Storage ----------
    DATABASE_URL: str = os.getenv("DATABASE_URL",
                                  "sqlite:///./data/medcare.db")
    # false -> collections live only in memory (no DB writes)
    PERSISTENCE_ENABLED: bool = _flag("PERSISTENCE_ENABLED", "true")

    # ---------- Locale ----------
    TIMEZONE: str = os.getenv("TIMEZONE", "Asia/Kolkata")

    # ---------- Logging ----------
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # ---------- Ledger rules ----------
    APPOINTMENT_CONFLICT_SECONDS: int = int(
        os.getenv("APPOINTMENT_CONFLICT_SECONDS", "1800"))
    BILLING_LOCK_CLOSED_BILLS: bool = _flag("BILLING_LOCK_CLOSED_BILLS",
                                            "false")
    SEED_ROOMS: bool = _flag("SEED_ROOMS", "true")

    # ---------- Hospital info ----------
    HOSPITAL_NAME: str = os.getenv("HOSPITAL_NAME", "MedCare Hospital")
    HOSPITAL_ADDRESS: str = os.getenv(
        "HOSPITAL_ADDRESS", "123 Healthcare Avenue, Medical District")
    HOSPITAL_PHONE: str = os.getenv("HOSPITAL_PHONE", "+91 1800-MEDCARE")
    HOSPITAL_EMAIL: str = os.getenv("HOSPITAL_EMAIL",
                                    "contact@medcare.hospital")


settings = Settings()
