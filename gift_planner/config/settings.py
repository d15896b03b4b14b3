from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List


class Settings(BaseSettings):
    # Data backend: supabase | firestore | local
    data_backend: str = "local"

    # Supabase (relational backend)
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_service_role_key: Optional[str] = None  # Bypasses RLS when set

    # Firestore (document backend)
    firestore_project_id: Optional[str] = None
    firestore_database: Optional[str] = None  # None selects "(default)"

    # Local store persistence (localStorage analogue)
    local_storage_path: str = ".gift-planner/storage.json"

    # REST client
    api_base_url: str = "http://localhost:8080/api"
    api_timeout: float = 30.0
    client_storage_path: str = ".gift-planner/client.json"  # Auth token of the module-level client

    # App
    app_name: str = "gift-planner"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000,http://127.0.0.1:5173"
    rate_limit: str = "100/minute"  # slowapi format, e.g. "100/minute"
    rate_limit_enabled: bool = True

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",
        extra="ignore"
    )


settings = Settings()
