from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional
from os import environ
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

class Info(BaseModel):
    """Information about the API"""
    title: str = Field("Shamiri Journal API", description="API title")
    description: str = Field("Backend API for Shamiri Journal", description="API description")
    version: str = Field("1.0.0", description="API version")
    root_path: str = Field("/", description="API root path")
    docs_url: Optional[str] = Field("/docs", description="API documentation URL")
    redoc_url: Optional[str] = Field("/redoc", description="ReDoc documentation URL")


class Database(BaseModel):
    """Relational store configuration"""
    URL: str = Field(
        environ.get("DATABASE_URL", "sqlite+aiosqlite:///shamiri.db"),
        description="SQLAlchemy async database URL"
    )
    ECHO: bool = Field(environ.get("DATABASE_ECHO", "false").lower() == "true", description="Log SQL statements")


class LanguageModel(BaseModel):
    """Chat completion provider configuration"""
    # Format 'provider/model', e.g. 'openrouter/openai/gpt-4o-mini'
    LLM_SERVICE: str = Field(
        environ.get("LLM_SERVICE", "openrouter/openai/gpt-4o-mini"),
        description="LLM service in format 'provider/model'"
    )

    # OpenRouter Configuration
    OPENROUTER_API_KEY: str = Field(environ.get("OPENROUTER_API_KEY", ""), description="OpenRouter API key")
    OPENROUTER_BASE_URL: str = Field(
        environ.get("OPENROUTER_BASE_URL", "https://openrouter.ai/api/v1"),
        description="OpenRouter API base URL"
    )
    OPENROUTER_REFERER: str = Field(
        environ.get("OPENROUTER_REFERER", "https://getshamiri-journal.vercel.app/"),
        description="HTTP-Referer header sent to OpenRouter"
    )
    OPENROUTER_TITLE: str = Field(environ.get("OPENROUTER_TITLE", "Shamiri Journal"), description="X-Title header sent to OpenRouter")

    # OpenAI Configuration
    OPENAI_API_KEY: str = Field(environ.get("OPENAI_API_KEY", ""), description="OpenAI API key")

    # Anthropic Configuration
    ANTHROPIC_API_KEY: str = Field(environ.get("ANTHROPIC_API_KEY", ""), description="Anthropic API key")

    # Decoding parameters, held constant across calls
    TEMPERATURE: float = Field(float(environ.get("LLM_TEMPERATURE", "0.7")), description="Sampling temperature")
    MAX_TOKENS: int = Field(int(environ.get("LLM_MAX_TOKENS", "1000")), description="Maximum tokens in a reply")
    REQUEST_TIMEOUT: float = Field(float(environ.get("LLM_REQUEST_TIMEOUT", "60")), description="Provider request timeout in seconds")


class Pixabay(BaseModel):
    """Mood image lookup configuration"""
    API_KEY: str = Field(environ.get("PIXABAY_API_KEY", ""), description="Pixabay API key")
    BASE_URL: str = Field(environ.get("PIXABAY_BASE_URL", "https://pixabay.com/api/"), description="Pixabay search endpoint")
    TIMEOUT: float = Field(float(environ.get("PIXABAY_TIMEOUT", "10")), description="Lookup timeout in seconds")


class Server(BaseModel):
    """uvicorn settings used by `shamiri-server`"""
    HOST: str = Field(environ.get("SHAMIRI_HOST", "0.0.0.0"), description="Bind address")
    PORT: int = Field(int(environ.get("SHAMIRI_PORT", "8000")), description="Bind port")
    WORKERS: int = Field(int(environ.get("SHAMIRI_WORKERS", "1")), description="Worker processes")
    RELOAD: bool = Field(environ.get("SHAMIRI_RELOAD", "false").lower() in ("1", "true", "yes"), description="Reload on code changes")
    # The principal header is only trustworthy behind the identity gateway
    PROXY_HEADERS: bool = Field(environ.get("SHAMIRI_PROXY_HEADERS", "true").lower() in ("1", "true", "yes"), description="Trust X-Forwarded-* headers")
    FORWARDED_ALLOW_IPS: str = Field(environ.get("SHAMIRI_FORWARDED_ALLOW_IPS", "127.0.0.1"), description="Proxies allowed to set forwarded headers")


class Auth(BaseModel):
    """Principal forwarding from the upstream identity gateway"""
    PRINCIPAL_HEADER: str = Field(
        environ.get("AUTH_PRINCIPAL_HEADER", "X-Auth-User"),
        description="Header carrying the authenticated user id"
    )


class RateLimit(BaseModel):
    """Per-user throttling of entry and category creation"""
    CAPACITY: int = Field(int(environ.get("RATE_LIMIT_CAPACITY", "10")), description="Bucket size")
    REFILL_PER_HOUR: int = Field(int(environ.get("RATE_LIMIT_REFILL_PER_HOUR", "10")), description="Tokens restored per hour")


class BaseConfig(BaseSettings):
    """
    Defines the application's configuration settings.
    Utilizes pydantic-settings to automatically read from environment variables
    or a .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="allow"
    )

    # General settings
    app_name: str = "Shamiri Journal"
    log_level: str = environ.get("LOG_LEVEL", "INFO")
    log_file: Optional[str] = environ.get("LOG_FILE") or None
    INFO: Info = Info()
    SERVER: Server = Server()
    DATABASE: Database = Database()
    LLM: LanguageModel = LanguageModel()
    PIXABAY: Pixabay = Pixabay()
    AUTH: Auth = Auth()
    RATE_LIMIT: RateLimit = RateLimit()

# Create a global config instance
config = BaseConfig()
