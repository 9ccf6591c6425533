# censored/fitting/postprocess.py
from __future__ import annotations

from typing import Any, Optional

from censored.fitting.encoding import EncodingBlueprint
from censored.fitting.fitted_model import FittedModel, PathFittedModel, TrainingCache
from censored.registry.recipes import EngineKind, EngineRecipe
from censored.spec.formula import SurvFormula
from censored.spec.model_spec import ModelSpec
from censored.utils.errors import ConfigurationError

# attribute the path fit adapter stores its training copy under
TRAINING_ATTR = "training_data_"


def postprocess(
    raw_fit: Any,
    recipe: EngineRecipe,
    *,
    spec: ModelSpec,
    formula: SurvFormula,
    blueprint: Optional[EncodingBlueprint],
    elapsed: float,
) -> FittedModel:
    if recipe.kind is EngineKind.STANDARD:
        return FittedModel(
            spec=spec,
            fit=raw_fit,
            formula=formula,
            blueprint=blueprint,
            elapsed=elapsed,
        )

    training = getattr(raw_fit, TRAINING_ATTR, None)
    if training is None:
        raise ConfigurationError(
            f"Path engine '{recipe.engine}' returned a fit without `{TRAINING_ATTR}`"
        )
    delattr(raw_fit, TRAINING_ATTR)

    x, y = training
    return PathFittedModel(
        spec=spec,
        fit=raw_fit,
        formula=formula,
        blueprint=blueprint,
        elapsed=elapsed,
        training_cache=TrainingCache(x=x, y=y),
    )
