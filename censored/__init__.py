#!filepath: censored/__init__.py

from .utils.logger import Logging, logs, init_logging
from .config.app_config import AppConfig

from .spec import (
    DataInfo,
    Deferred,
    ModelSpec,
    SurvFormula,
    n_obs,
    n_predictors,
    predictor_names,
    proportional_hazards,
    survival_reg,
)
from .registry import default_registry
from .fitting import fit, FittedModel, PathFittedModel
from .prediction import multi_predict, predict

__version__ = "0.1.0"


def show_engines(family: str | None = None, registry=None) -> list[dict]:
    """
    Registered engines and the prediction types each one serves.
    """
    registry = registry or default_registry()
    rows = []
    for fam, engine in registry.engines(family):
        recipe = registry.lookup(fam, engine)
        rows.append(
            {
                "family": fam,
                "engine": engine,
                "mode": recipe.mode,
                "kind": recipe.kind.value,
                "types": registry.pred_types(fam, engine),
            }
        )
    return rows


__all__ = [
    "logs", "Logging", "init_logging",
    "AppConfig",
    "DataInfo", "Deferred", "n_obs", "n_predictors", "predictor_names",
    "ModelSpec", "SurvFormula",
    "proportional_hazards", "survival_reg",
    "default_registry", "show_engines",
    "fit", "FittedModel", "PathFittedModel",
    "predict", "multi_predict",
]
