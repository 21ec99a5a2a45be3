from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 5000
    RELOAD: bool = False

    # Database
    DATABASE_URL: str = "sqlite:///./estatehub.db"
    SQL_ECHO: bool = False
    CREATE_TABLES_ON_STARTUP: bool = True

    # CORS
    CLIENT_URL: str = "http://localhost:3001"

    # Security
    SECRET_KEY: str = "your-secret-key-here"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_DAYS: int = 7

    # Media host (Cloudinary)
    CLOUDINARY_CLOUD_NAME: str = ""
    CLOUDINARY_API_KEY: str = ""
    CLOUDINARY_API_SECRET: str = ""
    MEDIA_TIMEOUT_SECONDS: float = 120.0

    # Uploads
    MAX_UPLOAD_SIZE_MB: int = 50
    MAX_PROPERTY_IMAGES: int = 5

    # Chat assistant
    OPENAI_API_KEY: str = ""
    OPENAI_API_URL: str = "https://api.openai.com/v1/chat/completions"
    OPENAI_MODEL: str = "gpt-3.5-turbo"

    # Logging
    LOG_LEVEL: str = "INFO"

    @field_validator("CLIENT_URL")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        # CORS origins are compared exactly
        return v.rstrip("/")

    @property
    def max_upload_size_bytes(self) -> int:
        return self.MAX_UPLOAD_SIZE_MB * 1024 * 1024

    class Config:
        env_file = ".env"


settings = Settings()
