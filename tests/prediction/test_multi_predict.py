#!filepath: tests/prediction/test_multi_predict.py
from __future__ import annotations

import numpy as np
import pytest

from censored import AppConfig, fit, multi_predict, predict, proportional_hazards
from censored.config import PredictConfig
from censored.utils.errors import IncompatibleStrengthError, InvalidArgumentError

ALPHAS = [0.01, 0.1, 1.0]


@pytest.fixture(scope="module")
def path_model(surv_data, formula, registry):
    spec = proportional_hazards(engine="coxnet").set_engine("coxnet", alphas=ALPHAS)
    return fit(spec, formula, surv_data, registry=registry)


def test_linear_pred_per_row_tables(path_model, new_data, registry):
    out = multi_predict(path_model, new_data, "linear_pred", penalty=[1.0, 0.01, 0.1], registry=registry)

    assert len(out) == len(new_data)
    assert list(out.index) == list(new_data.index)
    for cell in out[".pred"]:
        assert list(cell.columns) == ["penalty", ".pred_linear_pred"]
        assert cell["penalty"].tolist() == pytest.approx(ALPHAS)


def test_linear_pred_matches_single_predictions(path_model, new_data, registry):
    out = multi_predict(path_model, new_data, penalty=ALPHAS, registry=registry)

    for i, penalty in enumerate(ALPHAS):
        single = predict(path_model, new_data, "linear_pred", penalty=penalty, registry=registry)
        batch = [cell[".pred_linear_pred"].iloc[i] for cell in out[".pred"]]
        assert batch == pytest.approx(single[".pred_linear_pred"].tolist())


def test_defaults_to_full_path(path_model, new_data, registry):
    out = multi_predict(path_model, new_data, registry=registry)

    assert out[".pred"].iloc[0]["penalty"].tolist() == pytest.approx(ALPHAS)


def test_survival_through_predict_multi(path_model, new_data, registry):
    out = predict(
        path_model,
        new_data,
        "survival",
        time=[5.0, 1.0],
        penalty=[0.1, 0.01],
        multi=True,
        registry=registry,
    )

    cell = out[".pred"].iloc[0]
    assert list(cell.columns) == ["penalty", ".time", ".pred_survival"]
    assert cell["penalty"].tolist() == [0.01, 0.01, 0.1, 0.1]
    assert cell[".time"].tolist() == [5.0, 1.0, 5.0, 1.0]


def test_parallel_matches_sequential(path_model, new_data, registry):
    sequential = multi_predict(path_model, new_data, "survival", time=[2.0, 8.0], registry=registry)
    threaded = multi_predict(
        path_model,
        new_data,
        "survival",
        time=[2.0, 8.0],
        registry=registry,
        config=AppConfig(predict=PredictConfig(max_workers=3)),
    )

    for a, b in zip(sequential[".pred"], threaded[".pred"]):
        assert np.allclose(a.to_numpy(), b.to_numpy())


def test_penalty_outside_path(path_model, new_data, registry):
    with pytest.raises(IncompatibleStrengthError):
        multi_predict(path_model, new_data, penalty=[0.01, 10.0], registry=registry)


def test_standard_engine_has_no_path(surv_data, formula, new_data, registry):
    model = fit(proportional_hazards(engine="sksurv"), formula, surv_data, registry=registry)

    with pytest.raises(InvalidArgumentError):
        multi_predict(model, new_data, registry=registry)
    with pytest.raises(InvalidArgumentError):
        predict(model, new_data, "linear_pred", multi=True, registry=registry)
