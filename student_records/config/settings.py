from typing import List, Union
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Application
    ENVIRONMENT: str = "development"
    NAME: str = "Student Records Manager"
    VERSION: str = "1.0.0"
    API_PREFIX: str = "/api/v1"
    """Pydantic v2 doesn't support parsing List[str] from a plain comma-separated string by default anymore."""
    ALLOWED_HOSTS: Union[str, List[str]] = "http://localhost:3000,http://localhost:5173"
    LOG_LEVEL: str = "INFO"
    LOG_CONFIG_PATH: str = "logging_config.json"

    # Records
    COURSE_OFFERINGS: Union[str, List[str]] = "BCA,BBA,B.Tech,B.Sc,MCA,MBA"
    SEED_SAMPLE_DATA: bool = True

    @field_validator("ALLOWED_HOSTS", "COURSE_OFFERINGS", mode="before")
    def assemble_comma_separated(
        cls, v: Union[str, List[str]]
    ) -> Union[List[str], str]:
        if not v:
            return []
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",") if i.strip()]
        return v

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )


settings = Settings()
