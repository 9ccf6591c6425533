"""
Fitting (FINAL / FROZEN)

spec + formula + data
    -> EncodingBlueprint
    -> translate()      standardized -> native args
    -> native routine
    -> postprocess()    -> FittedModel / PathFittedModel
"""
from .encoding import EncodingBlueprint
from .fit import fit
from .fitted_model import FittedModel, PathFittedModel, TrainingCache
from .postprocess import postprocess
from .translate import TranslatedArgs, translate

__all__ = [
    "EncodingBlueprint",
    "fit",
    "FittedModel",
    "PathFittedModel",
    "TrainingCache",
    "postprocess",
    "TranslatedArgs",
    "translate",
]
