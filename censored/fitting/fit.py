#!filepath: censored/fitting/fit.py
from __future__ import annotations

import warnings
from contextlib import contextmanager
from typing import Any, Dict, Optional

import pandas as pd
from lifelines.exceptions import ConvergenceWarning as LifelinesConvergenceWarning
from sklearn.exceptions import ConvergenceWarning

from censored import logs
from censored.config import AppConfig, default_config
from censored.fitting.encoding import EncodingBlueprint
from censored.fitting.fitted_model import FittedModel, PathFittedModel
from censored.fitting.postprocess import postprocess
from censored.fitting.translate import translate
from censored.observability.timer import Timer
from censored.registry.recipes import EngineKind, EngineRecipe, Interface
from censored.registry.registry import EngineRegistry
from censored.spec.deferred import DataInfo
from censored.spec.formula import SurvFormula
from censored.spec.model_spec import ModelSpec
from censored.utils.errors import InvalidArgumentError, NativeFitFailure

_CONVERGENCE = (ConvergenceWarning, LifelinesConvergenceWarning)


def fit(
    spec: ModelSpec,
    formula: SurvFormula | str,
    data: pd.DataFrame,
    *,
    registry: Optional[EngineRegistry] = None,
    config: Optional[AppConfig] = None,
    catch: Optional[bool] = None,
) -> FittedModel:
    """
    Fit `spec` on `data`.

    Flow:
        resolve formula -> encode predictors -> translate args
        -> native fit (timed, warnings logged) -> postprocess

    With catch=True (config default) a failing native routine yields a
    FittedModel carrying the failure; predict() then raises FitFailedError.
    """
    if registry is None:
        from censored.registry.defaults import default_registry

        registry = default_registry()
    config = config or default_config()
    catch = config.fit.catch if catch is None else catch

    if not isinstance(data, pd.DataFrame):
        raise InvalidArgumentError("data", f"expected a DataFrame, got {type(data).__name__}")
    if spec.engine is None:
        raise InvalidArgumentError("engine", f"no engine set for {spec.family}")

    recipe = registry.lookup(spec.family, spec.engine)
    formula = SurvFormula.coerce(formula).resolve(data)
    blueprint = EncodingBlueprint.from_data(data, formula.predictors, recipe.encoding)
    x = blueprint.transform(data)

    info = DataInfo(n_obs=len(data), predictor_names=formula.predictors)
    translated = translate(spec, registry, info)
    call = _assemble(recipe, x, data, formula)

    logs.info(
        f"[Fit] START {translated.spec!r} n={len(data)} columns={len(x.columns)}"
    )

    timer = Timer()
    try:
        with timer.measure("fit"), _logged_warnings(spec.engine, config.fit.capture_warnings):
            raw = recipe.fit.func(**call, **translated.native)
    except Exception as exc:
        failure = NativeFitFailure(spec.engine, exc)
        if not catch:
            raise failure from exc
        logs.error(f"[Fit] FAILED {failure}")
        model_cls = PathFittedModel if recipe.kind is EngineKind.PATH else FittedModel
        return model_cls(
            spec=translated.spec,
            fit=None,
            formula=formula,
            blueprint=blueprint,
            elapsed=timer.last("fit"),
            failure=failure,
        )

    fitted = postprocess(
        raw,
        recipe,
        spec=translated.spec,
        formula=formula,
        blueprint=blueprint,
        elapsed=timer.last("fit"),
    )
    logs.info(f"[Fit] DONE {translated.spec!r} elapsed={fitted.elapsed:.3f}s")
    return fitted


# ============================================================
# internal
# ============================================================
def _assemble(
    recipe: EngineRecipe,
    x: pd.DataFrame,
    data: pd.DataFrame,
    formula: SurvFormula,
) -> Dict[str, Any]:
    if recipe.fit.interface is Interface.MATRIX:
        return {
            "x": x,
            "y": recipe.fit.outcome(data[formula.time], data[formula.event]),
        }

    frame = x.copy()
    frame[formula.time] = data[formula.time].to_numpy()
    frame[formula.event] = data[formula.event].to_numpy()
    return {
        "data": frame,
        "duration_col": formula.time,
        "event_col": formula.event,
    }


@contextmanager
def _logged_warnings(engine: str, enabled: bool):
    """
    Route warnings raised by the native routine through the logger.
    """
    if not enabled:
        yield
        return

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        try:
            yield
        finally:
            for w in caught:
                text = f"[Fit] {engine}: {w.category.__name__}: {w.message}"
                if issubclass(w.category, _CONVERGENCE):
                    logs.warning(text)
                else:
                    logs.debug(text)
