from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./mission_control.db"
    RELAY_URL: str = "http://127.0.0.1:8000/api/relay"
    RELAY_TIMEOUT: float = 10.0
    POLL_INTERVAL_MS: int = 2000
    DEFAULT_AVATAR: str = "🤖"
    LOG_LEVEL: str = "INFO"
    HOST: str = "127.0.0.1"
    PORT: int = 8000

    class Config:
        env_file = ".env"
        env_prefix = "MISSION_CONTROL_"

settings = Settings()
