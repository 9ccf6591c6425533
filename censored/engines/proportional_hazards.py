# censored/engines/proportional_hazards.py
"""
proportional_hazards: lifelines, sksurv and coxnet engines.

Every linear predictor here is on the hazard scale natively and is
negated on the way out.
"""
from __future__ import annotations

from censored.engines import lifelines_engine, sksurv_engine
from censored.prediction.normalize import (
    as_matrix,
    as_vector,
    curve_from_frame,
    negate_linear_pred,
    to_survival_levels,
)
from censored.registry.recipes import (
    EncodingRules,
    EngineKind,
    FitRecipe,
    Interface,
    ModelArg,
    PredictionRecipe,
    Slot,
)
from censored.registry.registry import RegistryBuilder
from censored.spec.model_spec import CENSORED_REGRESSION

FAMILY = "proportional_hazards"

_FRAME_PROTECT = ("data", "duration_col", "event_col")
_MATRIX_PROTECT = ("x", "y")

# baseline hazard absorbs the intercept
_COX_ENCODING = EncodingRules(
    predictor_indicators="traditional",
    compute_intercept=True,
    remove_intercept=True,
)


def make_proportional_hazards(builder: RegistryBuilder) -> None:
    _lifelines(builder)
    _sksurv(builder)
    _coxnet(builder)


# ======================================================================
# lifelines
# ======================================================================
def _lifelines(builder: RegistryBuilder) -> None:
    builder.register(
        FAMILY,
        "lifelines",
        FitRecipe(
            func=lifelines_engine.coxph_fit,
            interface=Interface.FRAME,
            protect=_FRAME_PROTECT,
        ),
        _COX_ENCODING,
        args=[
            ModelArg("penalty", "penalizer"),
            ModelArg("mixture", "l1_ratio"),
        ],
    )

    builder.set_pred(
        FAMILY, "lifelines", CENSORED_REGRESSION, "time",
        PredictionRecipe(
            func="predict_expectation",
            args={"X": Slot.NEW_DATA},
            post=as_vector,
        ),
    )
    builder.set_pred(
        FAMILY, "lifelines", CENSORED_REGRESSION, "survival",
        PredictionRecipe(
            func="predict_survival_function",
            args={"X": Slot.NEW_DATA, "times": Slot.EVAL_TIME},
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
            func="predict_log_partial_hazard",
            args={"X": Slot.NEW_DATA},
            post=negate_linear_pred,
        ),
    )


# ======================================================================
# sksurv
# ======================================================================
def _sksurv(builder: RegistryBuilder) -> None:
    builder.register(
        FAMILY,
        "sksurv",
        FitRecipe(
            func=sksurv_engine.coxph_fit,
            interface=Interface.MATRIX,
            protect=_MATRIX_PROTECT,
            outcome=sksurv_engine.make_outcome,
        ),
        _COX_ENCODING,
        args=[ModelArg("penalty", "alpha")],
    )

    builder.set_pred(
        FAMILY, "sksurv", CENSORED_REGRESSION, "survival",
        PredictionRecipe(
            func=sksurv_engine.coxph_survival,
            args={"model": Slot.FIT, "x": Slot.NEW_DATA, "eval_time": Slot.EVAL_TIME},
            post=as_matrix,
        ),
    )
    builder.set_pred(
        FAMILY, "sksurv", CENSORED_REGRESSION, "linear_pred",
        PredictionRecipe(
            func="predict",
            args={"X": Slot.NEW_DATA},
            post=negate_linear_pred,
        ),
    )


# ======================================================================
# coxnet (regularization path)
# ======================================================================
def _coxnet(builder: RegistryBuilder) -> None:
    builder.register(
        FAMILY,
        "coxnet",
        FitRecipe(
            func=sksurv_engine.coxnet_fit,
            interface=Interface.MATRIX,
            protect=_MATRIX_PROTECT,
            defaults={"fit_baseline_model": True},
            outcome=sksurv_engine.make_outcome,
        ),
        _COX_ENCODING,
        kind=EngineKind.PATH,
        args=[
            ModelArg("penalty", "alpha", has_submodel=True),
            ModelArg("mixture", "l1_ratio"),
        ],
    )

    builder.set_pred(
        FAMILY, "coxnet", CENSORED_REGRESSION, "survival",
        PredictionRecipe(
            func=sksurv_engine.coxnet_survival,
            args={
                "model": Slot.FIT,
                "x": Slot.NEW_DATA,
                "eval_time": Slot.EVAL_TIME,
                "alpha": Slot.PENALTY,
                "training": Slot.TRAINING,
            },
            post=as_matrix,
        ),
    )
    builder.set_pred(
        FAMILY, "coxnet", CENSORED_REGRESSION, "linear_pred",
        PredictionRecipe(
            func=sksurv_engine.coxnet_predict_path,
            args={"model": Slot.FIT, "x": Slot.NEW_DATA, "alphas": Slot.PENALTY},
            post=negate_linear_pred,
        ),
    )
