#!filepath: censored/config/fit_config.py
from pydantic import BaseModel


class FitConfig(BaseModel):
    # attach native failures to the FittedModel instead of raising
    catch: bool = True
    # route native warnings (convergence etc.) through the logger
    capture_warnings: bool = True
