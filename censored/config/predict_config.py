#!filepath: censored/config/predict_config.py
from typing import Optional

from pydantic import BaseModel, Field


class PredictConfig(BaseModel):
    # per-strength sub-calls of multi_predict; 1 = sequential, None = cpu count
    max_workers: Optional[int] = Field(default=1, ge=1)
