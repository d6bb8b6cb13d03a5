# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-08
# Description: Config
# -----------------------------------------------------------------------------

import os
from dataclasses import dataclass
from dotenv import load_dotenv, find_dotenv

# Load .env once globally
load_dotenv(find_dotenv(usecwd=True), override=False)


@dataclass(frozen=True)
class Config:
    # Ollama (OpenAI-compatible endpoint, used for chat and embeddings)
    ollama_base_url: str
    ollama_api_key: str
    chat_model: str
    embedding_model: str
    vector_dimension: int

    # Catalog database (SQLAlchemy URL)
    database_url: str

    # Chroma Vector Database
    chroma_collection: str
    chroma_path: str
    chroma_host: str = ""
    chroma_port: int = 8000
    chroma_api_key: str = ""
    chroma_tenant: str = ""
    chroma_database: str = ""

    # ---- Single source of truth: field_name -> ENV VAR NAME ----
    ENV_VARS = {
        # Ollama
        "ollama_base_url": "OLLAMA_BASE_URL",      # e.g. http://localhost:11434
        "ollama_api_key": "OLLAMA_API_KEY",
        "chat_model": "OLLAMA_MODEL",
        "embedding_model": "EMBEDDING_MODEL",
        "vector_dimension": "VECTOR_DIMENSION",

        # Catalog
        "database_url": "DATABASE_URL",

        # Chroma
        "chroma_collection": "CHROMA_COLLECTION",
        "chroma_path": "CHROMA_PATH",
        "chroma_host": "CHROMA_HOST",
        "chroma_port": "CHROMA_PORT",
        "chroma_api_key": "CHROMA_API_KEY",
        "chroma_tenant": "CHROMA_TENANT",
        "chroma_database": "CHROMA_DATABASE",
    }

    DEFAULTS = {
        "ollama_base_url": "http://localhost:11434",
        "ollama_api_key": "ollama",
        "chat_model": "llama3.1:8b",
        "embedding_model": "nomic-embed-text",
        "vector_dimension": "768",
        "database_url": "sqlite:///./shop_catalog.db",
        "chroma_collection": "ecommerce-products",
        "chroma_path": "./chroma_data",
        "chroma_host": "",
        "chroma_port": "8000",
        "chroma_api_key": "",
        "chroma_tenant": "",
        "chroma_database": "",
    }

    # Fields that may legitimately be empty (alternate Chroma deployments)
    OPTIONAL_FIELDS = (
        "chroma_host",
        "chroma_api_key",
        "chroma_tenant",
        "chroma_database",
    )

    INT_FIELDS = ("vector_dimension", "chroma_port")

    @staticmethod
    def from_env() -> "Config":
        """Build Config object from environment variables."""
        kwargs = {}
        for field_name, env_name in Config.ENV_VARS.items():
            raw = (os.getenv(env_name) or Config.DEFAULTS[field_name]).strip()
            if field_name in Config.INT_FIELDS:
                try:
                    kwargs[field_name] = int(raw)
                except ValueError as e:
                    raise ValueError(f"Env var {env_name} must be an int, got {raw!r}") from e
            else:
                kwargs[field_name] = raw
        return Config(**kwargs)

    def __post_init__(self):
        """
        Fail fast if any required config is missing.

        Chroma Cloud fields are only required together: setting
        CHROMA_API_KEY without tenant/database is a configuration error.
        """
        missing_fields = [
            k for k, v in self.__dict__.items()
            if k not in self.OPTIONAL_FIELDS and v in ("", None)
        ]

        if missing_fields:
            missing_env_vars = [self.ENV_VARS[f] for f in missing_fields]
            raise ValueError(f"Missing required environment variables: {missing_env_vars}")

        if self.vector_dimension <= 0:
            raise ValueError("VECTOR_DIMENSION must be a positive integer")

        if self.chroma_api_key and not (self.chroma_tenant and self.chroma_database):
            raise ValueError(
                "CHROMA_API_KEY is set but CHROMA_TENANT / CHROMA_DATABASE are missing"
            )

    @property
    def chroma_mode(self) -> str:
        """cloud | http | persistent"""
        if self.chroma_api_key:
            return "cloud"
        if self.chroma_host:
            return "http"
        return "persistent"

    @property
    def ollama_openai_url(self) -> str:
        """Ollama's OpenAI-compatible API root."""
        base = self.ollama_base_url.rstrip("/")
        return base if base.endswith("/v1") else f"{base}/v1"

    def summary(self) -> dict:
        """Return a safe, non-sensitive summary for logging."""
        return {
            "ollama_base_url": self.ollama_base_url,
            "chat_model": self.chat_model,
            "embedding_model": self.embedding_model,
            "vector_dimension": self.vector_dimension,
            "database_url": self.database_url.split("@")[-1],
            "chroma_mode": self.chroma_mode,
            "chroma_collection": self.chroma_collection,
            "chroma_tenant": self.chroma_tenant,
            "chroma_database": self.chroma_database,
        }
