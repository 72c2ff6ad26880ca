"""
Configuration settings for the rental marketplace service layer.
"""
import os
from dataclasses import dataclass
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass
class SupabaseConfig:
    """Supabase configuration settings for the persistent storage backend."""
    url: str = os.getenv("SUPABASE_URL", "")
    anon_key: str = os.getenv("SUPABASE_ANON_KEY", "")
    service_role_key: str = os.getenv("SUPABASE_SERVICE_ROLE_KEY", "")

    def get_auth_key(self) -> str:
        """Prefer service role key for server-side operations when available."""
        return self.service_role_key or self.anon_key


@dataclass
class AppConfig:
    """Application configuration settings."""
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Storage backend: "memory" (seeded demo data) or "supabase"
    storage_backend: str = os.getenv("STORAGE_BACKEND", "memory")
    seed_demo_data: bool = _env_flag("SEED_DEMO_DATA", "true")

    # Data storage collection/table names
    listings_collection: str = "listings"
    bookings_collection: str = "bookings"
    users_collection: str = "users"
    reviews_collection: str = "reviews"

    # Booking rules
    # "half_open" treats [check_in, check_out) so back-to-back stays are allowed,
    # "inclusive" rejects bookings that share a boundary date.
    overlap_policy: str = os.getenv("OVERLAP_POLICY", "half_open")
    service_fee_rate: float = float(os.getenv("SERVICE_FEE_RATE", "0.14"))

    # Search
    default_page_size: int = int(os.getenv("DEFAULT_PAGE_SIZE", "20"))
    max_page_size: int = int(os.getenv("MAX_PAGE_SIZE", "100"))

    # Simulated network latency of the in-process mock client
    mock_latency_ms: int = int(os.getenv("MOCK_LATENCY_MS", "200"))

    # Auth
    jwt_secret: str = os.getenv("JWT_SECRET") or os.getenv("ENCRYPTION_SECRET") or "change-me"
    jwt_exp_seconds: int = int(os.getenv("JWT_EXP_SECONDS", "86400"))
    encryption_secret: str = os.getenv("ENCRYPTION_SECRET", "change-me")
    encryption_salt: str = os.getenv("ENCRYPTION_SALT", "rental-marketplace")

    @property
    def inclusive_overlap(self) -> bool:
        return self.overlap_policy.strip().lower() == "inclusive"


@dataclass
class APIConfig:
    """REST API client configuration settings."""
    base_url: str = os.getenv("API_BASE_URL", "http://127.0.0.1:8001/api/v1")
    timeout_seconds: float = float(os.getenv("API_TIMEOUT_SECONDS", "30"))
    mock_api: bool = _env_flag("MOCK_API")


supabase_config = SupabaseConfig()
app_config = AppConfig()
api_config = APIConfig()
