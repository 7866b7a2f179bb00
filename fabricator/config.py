from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings

# Load environment variables before everything else
load_dotenv()


class Settings(BaseSettings):
    """Application settings."""

    # App Settings
    DEBUG: bool = Field(default=False)
    VERSION: str = Field(default="0.1.0")
    LOG_LEVEL: str = Field(default="INFO")
    LOG_JSON: bool = Field(default=False, description="Render logs as JSON lines")
    ENVIRONMENT: str = Field(default="production")
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=8080)

    # API Keys
    OPENAI_API_KEY: str = Field(default="")

    # Upstream model
    OPENAI_BASE_URL: str = Field(default="https://api.openai.com")
    OPENAI_MODEL: str = Field(default="gpt-5-nano")
    OPENAI_TEMPERATURE: float = Field(default=0.8)
    OPENAI_MAX_TOKENS: int = Field(default=400)
    OPENAI_TIMEOUT: float = Field(default=30.0, description="Seconds per upstream call")
    MAX_RETRIES: int = Field(default=2, ge=0)
    RETRY_BACKOFF_MS: int = Field(default=100, ge=0)

    # Synthesized endpoints
    API_PREFIX: str = Field(default="/api/")
    API_HOST: str = Field(default="api.example.com")
    ASSISTANT_PERSONA: str = Field(
        default="a helpful and playful API assistant",
        description="Who the model pretends to be in the system prompt",
    )

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() == "development"

    class Config:
        env_file = ".env"
        case_sensitive = True


# Initialize settings
settings = Settings()
