from typing import Optional

from pydantic import BaseModel, ValidationError, field_validator

from config import YamlConfig

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


class SettingsSchema(BaseModel):
    data_path: str = "./data/workout-data.json"
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"unknown log level: {value}")
        return level


def validate_settings(data: dict) -> None:
    try:
        SettingsSchema(**data)
    except ValidationError as e:
        raise ValueError(str(e))


def load_settings(path: str | None = None) -> SettingsSchema:
    """Read the YAML settings file and return validated settings."""
    data = YamlConfig(path).load()
    try:
        return SettingsSchema(**data)
    except ValidationError as e:
        raise ValueError(str(e))
