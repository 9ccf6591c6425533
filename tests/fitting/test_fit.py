#!filepath: tests/fitting/test_fit.py
from __future__ import annotations

import pytest

from censored import fit, predict, proportional_hazards, survival_reg
from censored.fitting import PathFittedModel
from censored.registry import EngineKind
from censored.spec import SurvFormula
from censored.utils.errors import FitFailedError, InvalidArgumentError, NativeFitFailure


def test_fit_lifelines_cox(surv_data, formula, registry):
    fitted = fit(proportional_hazards(penalty=0.01), formula, surv_data, registry=registry)

    assert fitted.kind is EngineKind.STANDARD
    assert fitted.engine == "lifelines"
    assert fitted.elapsed > 0
    assert fitted.spec.args["penalty"] == 0.01
    assert fitted.fit.penalizer == 0.01
    assert fitted.blueprint.columns == ("x1", "x2", "grpb", "grpc")


def test_fit_dot_formula_resolves_remaining_columns(surv_data, registry):
    fitted = fit(
        proportional_hazards(engine="sksurv"),
        "Surv(time, status) ~ .",
        surv_data,
        registry=registry,
    )

    assert fitted.formula == SurvFormula("time", "status", ("x1", "x2", "grp"))


def test_fit_coxnet_keeps_training_cache(surv_data, formula, registry):
    spec = proportional_hazards(penalty=0.1, engine="coxnet").set_engine(
        "coxnet", alphas=[0.01, 0.1]
    )

    fitted = fit(spec, formula, surv_data, registry=registry)

    assert isinstance(fitted, PathFittedModel)
    assert fitted.kind is EngineKind.PATH
    assert fitted.path.tolist() == pytest.approx([0.01, 0.1])
    assert len(fitted.training_cache.x) == len(surv_data)
    assert not hasattr(fitted.fit, "training_data_")


def test_fit_failure_is_captured(surv_data, formula, registry):
    fitted = fit(survival_reg(dist="gamma"), formula, surv_data, registry=registry)

    assert fitted.failed
    assert isinstance(fitted.failure, NativeFitFailure)
    assert isinstance(fitted.failure.cause, ValueError)

    with pytest.raises(FitFailedError):
        predict(fitted, surv_data, "time", registry=registry)


def test_fit_failure_raised_without_catch(surv_data, formula, registry):
    with pytest.raises(NativeFitFailure) as exc:
        fit(survival_reg(dist="gamma"), formula, surv_data, registry=registry, catch=False)

    assert exc.value.engine == "lifelines"


def test_fit_rejects_missing_outcome(surv_data, registry):
    with pytest.raises(InvalidArgumentError):
        fit(proportional_hazards(), "Surv(days, status) ~ x1", surv_data, registry=registry)


def test_fit_rejects_bad_formula(surv_data, registry):
    with pytest.raises(InvalidArgumentError):
        fit(proportional_hazards(), "time ~ x1", surv_data, registry=registry)
