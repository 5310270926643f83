from __future__ import annotations
from pathlib import Path
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    data_dir: Path = Field(default=Path.home() / ".config" / "doom-launcher", alias="DOOM_LAUNCHER_HOME")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_json: bool = Field(default=False, alias="LOG_JSON")

    dialog_host: str = Field(default="stub", alias="DOOM_LAUNCHER_DIALOG")  # "stub" or "native"

    api_host: str = Field(default="127.0.0.1", alias="API_HOST")
    api_port: int = Field(default=8000, alias="API_PORT")

    model_config = SettingsConfigDict(extra="ignore", populate_by_name=True)

    @property
    def logs_dir(self) -> Path:
        return self.data_dir / "logs"
