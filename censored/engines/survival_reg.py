# censored/engines/survival_reg.py
"""
survival_reg: parametric AFT models through lifelines.

The linear predictor is the location parameter on the log-time scale,
so it already grows with survival time.
"""
from __future__ import annotations

from censored.engines import lifelines_engine
from censored.prediction.normalize import (
    as_matrix,
    as_vector,
    curve_from_frame,
    to_survival_levels,
)
from censored.registry.recipes import (
    EncodingRules,
    FitRecipe,
    Interface,
    ModelArg,
    PredictionRecipe,
    Slot,
)
from censored.registry.registry import RegistryBuilder
from censored.spec.model_spec import CENSORED_REGRESSION

FAMILY = "survival_reg"


def make_survival_reg(builder: RegistryBuilder) -> None:
    builder.register(
        FAMILY,
        "lifelines",
        FitRecipe(
            func=lifelines_engine.aft_fit,
            interface=Interface.FRAME,
            protect=("data", "duration_col", "event_col"),
        ),
        # lifelines adds its own Intercept to every parameter
        EncodingRules(
            predictor_indicators="traditional",
            compute_intercept=True,
            remove_intercept=True,
        ),
        args=[ModelArg("dist", "dist")],
    )

    builder.set_pred(
        FAMILY, "lifelines", CENSORED_REGRESSION, "time",
        PredictionRecipe(
            func="predict_expectation",
            args={"df": Slot.NEW_DATA},
            post=as_vector,
        ),
    )
    builder.set_pred(
        FAMILY, "lifelines", CENSORED_REGRESSION, "survival",
        PredictionRecipe(
            func="predict_survival_function",
            args={"df": Slot.NEW_DATA, "times": Slot.EVAL_TIME},
            post=curve_from_frame,
        ),
    )
    builder.set_pred(
        FAMILY, "lifelines", CENSORED_REGRESSION, "hazard",
        PredictionRecipe(
            func="predict_hazard",
            args={"df": Slot.NEW_DATA, "times": Slot.EVAL_TIME},
            post=curve_from_frame,
        ),
    )
    builder.set_pred(
        FAMILY, "lifelines", CENSORED_REGRESSION, "quantile",
        PredictionRecipe(
            func=lifelines_engine.percentiles,
            args={"model": Slot.FIT, "new_data": Slot.NEW_DATA, "p": Slot.QUANTILE},
            pre=to_survival_levels,
            post=as_matrix,
        ),
    )
    builder.set_pred(
        FAMILY, "lifelines", CENSORED_REGRESSION, "linear_pred",
        PredictionRecipe(
            func=lifelines_engine.aft_linear_predictor,
            args={"model": Slot.FIT, "new_data": Slot.NEW_DATA},
            post=as_vector,
        ),
    )
