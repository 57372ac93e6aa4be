"""Evidence Integrity - Configuration
System-wide configuration with sensible defaults.
"""

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings


class DatabaseSettings(BaseSettings):
    """PostgreSQL database configuration."""

    host: str = "localhost"
    port: int = 5432
    user: str = "postgres"
    password: str = "postgres"
    database: str = "evidence_integrity"
    pool_size: int = 10
    max_overflow: int = 20

    @property
    def url(self) -> str:
        return f"postgresql://{self.user}:{self.password}@{self.host}:{self.port}/{self.database}"

    @property
    def async_url(self) -> str:
        return f"postgresql+asyncpg://{self.user}:{self.password}@{self.host}:{self.port}/{self.database}"

    class Config:
        env_prefix = "POSTGRES_"
        env_file = ".env"
        extra = "ignore"


class APISettings(BaseSettings):
    """FastAPI configuration."""

    title: str = "Evidence Integrity API"
    version: str = "1.0.0"
    description: str = "Tamper-evident collection and verification of social-media evidence"
    host: str = "0.0.0.0"
    port: int = 8000
    jwt_secret: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 30
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:5173"]

    class Config:
        env_prefix = "API_"
        env_file = ".env"
        extra = "ignore"


class IntegritySettings(BaseSettings):
    """Fingerprinting and verification configuration."""

    hash_algorithm: str = "SHA-256"
    verification_type: str = "content_hash"
    min_comparison_references: int = 2

    class Config:
        env_prefix = "INTEGRITY_"
        env_file = ".env"
        extra = "ignore"


class Config(BaseModel):
    """Master configuration for Evidence Integrity."""

    project_name: str = "Evidence Integrity"
    version: str = "0.1.0"
    debug: bool = False

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    api: APISettings = Field(default_factory=APISettings)
    integrity: IntegritySettings = Field(default_factory=IntegritySettings)

    # Logging
    log_dir: str | None = None
    log_level: str = "INFO"
    log_json: bool = True

    @classmethod
    def from_yaml(cls, path: str) -> "Config":
        """Load configuration from YAML file."""
        import yaml

        with open(path) as f:
            data = yaml.safe_load(f) or {}
        return cls(**data)

    def to_yaml(self, path: str) -> None:
        """Save configuration to YAML file."""
        import yaml

        with open(path, "w") as f:
            yaml.dump(self.model_dump(mode="json"), f, default_flow_style=False)


# Settings instances
db_settings = DatabaseSettings()
api_settings = APISettings()
integrity_settings = IntegritySettings()
