# censored/prediction/single.py
from __future__ import annotations

from typing import Any

import numpy as np
import pandas as pd

from censored import logs
from censored.prediction.context import PredictionContext
from censored.prediction.normalize import format_prediction
from censored.prediction.penalty import resolve_penalty
from censored.registry.recipes import EngineKind, PredictionRecipe


def run_recipe(recipe: PredictionRecipe, ctx: PredictionContext) -> tuple[np.ndarray, PredictionContext]:
    """
    pre -> native call -> post.

    Returns the standardized values together with the context the pre hook
    produced (the formatter needs the final one).
    """
    if recipe.pre is not None:
        ctx = recipe.pre(ctx)
    raw = recipe.invoke(ctx.slots())
    values = recipe.post(raw, ctx) if recipe.post is not None else raw
    return values, ctx


def predict_one(
    recipe: PredictionRecipe,
    ctx: PredictionContext,
    penalty: Any = None,
) -> pd.DataFrame:
    values, ctx = run_recipe(recipe, with_strength(ctx, penalty))
    return format_prediction(values, ctx)


def with_strength(ctx: PredictionContext, penalty: Any) -> PredictionContext:
    fitted = ctx.fitted

    if fitted.kind is EngineKind.PATH:
        strength = resolve_penalty(
            penalty,
            fitted.path,
            spec_penalty=fitted.spec.args.get("penalty"),
        )
        return ctx.replace(penalty=strength)

    if fitted.kind is EngineKind.STANDARD:
        if penalty is not None:
            logs.debug(
                f"[Predict] engine '{fitted.engine}' has no path; penalty={penalty!r} ignored"
            )
        return ctx

    raise TypeError(f"unknown fitted model kind {fitted.kind!r}")
