# censored/prediction/multi.py
from __future__ import annotations

from typing import Any, Optional

import pandas as pd

from censored import logs
from censored.config import AppConfig, default_config
from censored.fitting.fitted_model import FittedModel
from censored.prediction.context import PredictionContext, build_context, coerce_type
from censored.prediction.normalize import SCALAR_COLUMNS, organize_path_pred, stack_by_penalty
from censored.prediction.parallel import PathExecutor
from censored.prediction.penalty import resolve_penalty
from censored.prediction.single import predict_one, run_recipe
from censored.registry.recipes import EngineKind, PredictionRecipe, PredictionType
from censored.registry.registry import EngineRegistry
from censored.utils.errors import InvalidArgumentError


def multi_predict(
    fitted: FittedModel,
    new_data: pd.DataFrame,
    type: PredictionType | str = "linear_pred",
    *,
    penalty: Any = None,
    time: Any = None,
    quantile: Any = None,
    registry: Optional[EngineRegistry] = None,
    config: Optional[AppConfig] = None,
) -> pd.DataFrame:
    """
    Predictions at several strengths of a path fit.

    Returns one row per input row; `.pred` holds a table with a `penalty`
    column first, sorted by penalty ascending. Strengths default to the
    whole trained path.
    """
    fitted.check()
    ptype = coerce_type(type)
    if registry is None:
        from censored.registry.defaults import default_registry

        registry = default_registry()
    recipe = registry.lookup_pred(fitted.family, fitted.engine, ptype)

    if fitted.kind is not EngineKind.PATH:
        raise InvalidArgumentError(
            "multi",
            f"engine '{fitted.engine}' has no regularization path; use predict()",
        )

    ctx = build_context(fitted, ptype, new_data, time=time, quantile=quantile)
    return expand(recipe, ctx, penalty, config=config)


def expand(
    recipe: PredictionRecipe,
    ctx: PredictionContext,
    penalty: Any,
    *,
    config: Optional[AppConfig] = None,
) -> pd.DataFrame:
    config = config or default_config()
    penalties = resolve_penalty(penalty, ctx.fitted.path, multi=True)
    logs.debug(
        f"[Predict] multi type={ctx.type.value} strengths={len(penalties)} rows={ctx.n_rows}"
    )

    if ctx.type is PredictionType.LINEAR_PRED:
        # one native call computes every strength (rows x strengths)
        wide, _ = run_recipe(recipe, ctx.replace(penalty=penalties))
        return organize_path_pred(
            wide, penalties, SCALAR_COLUMNS[PredictionType.LINEAR_PRED], ctx.index
        )

    results = PathExecutor.run(
        items=[float(p) for p in penalties],
        handler=lambda p: (p, predict_one(recipe, ctx, penalty=p)),
        max_workers=config.predict.max_workers,
    )
    return stack_by_penalty(results, ctx.index)
