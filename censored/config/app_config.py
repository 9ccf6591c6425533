#!filepath: censored/config/app_config.py
import os
from functools import lru_cache

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .fit_config import FitConfig
from .log_config import LogConfig
from .predict_config import PredictConfig


def config_dir() -> str:
    """
    Directory holding the packaged base.yml:
    censored/config/app_config.py -> censored/config
    """
    return os.path.abspath(os.path.dirname(__file__))


class AppConfig(BaseModel):
    log: LogConfig = Field(default_factory=LogConfig)
    fit: FitConfig = Field(default_factory=FitConfig)
    predict: PredictConfig = Field(default_factory=PredictConfig)

    @classmethod
    def load(cls, path: str | None = None, env_file: str | None = None) -> "AppConfig":
        """
        Load YAML config + .env

        - default path is the packaged censored/config/base.yml
        - CENSORED_LOG_LEVEL overrides log.level
        """
        # 1) .env first so overrides are visible below
        load_dotenv(env_file or os.path.join(os.getcwd(), ".env"))

        # 2) resolve the config path
        if path is None:
            path = os.path.join(config_dir(), "base.yml")

        if not os.path.exists(path):
            raise FileNotFoundError(f"Config file not found: {path}")

        # 3) read YAML
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

        level = os.getenv("CENSORED_LOG_LEVEL")
        if level:
            raw.setdefault("log", {})
            raw["log"]["level"] = level

        return cls(**raw)


@lru_cache(maxsize=1)
def default_config() -> AppConfig:
    return AppConfig()
