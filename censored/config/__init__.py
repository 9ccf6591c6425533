from .app_config import AppConfig, default_config
from .fit_config import FitConfig
from .log_config import LogConfig
from .predict_config import PredictConfig

__all__ = ["AppConfig", "default_config", "FitConfig", "LogConfig", "PredictConfig"]
