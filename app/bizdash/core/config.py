from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env")

    APP_NAME: str = "BizDash"
    AUTH_SECRET: str = "change-me"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    LOGIN_PATH: str = "/login"
    PROTECTED_PATHS: list[str] = ["/dashboard"]
    SESSION_COOKIE_NAME: str = "bizdash.session-token"

settings = Settings()
