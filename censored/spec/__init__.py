from .deferred import DataInfo, Deferred, n_obs, n_predictors, predictor_names
from .formula import SurvFormula
from .model_spec import ModelSpec, proportional_hazards, survival_reg

__all__ = [
    "DataInfo",
    "Deferred",
    "n_obs",
    "n_predictors",
    "predictor_names",
    "SurvFormula",
    "ModelSpec",
    "proportional_hazards",
    "survival_reg",
]
