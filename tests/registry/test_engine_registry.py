#!filepath: tests/registry/test_engine_registry.py
from __future__ import annotations

import pytest

from censored import show_engines
from censored.registry import (
    EncodingRules,
    EngineKind,
    FitRecipe,
    PredictionRecipe,
    PredictionType,
    RegistryBuilder,
    build_registry,
)
from censored.utils.errors import (
    ConfigurationError,
    NotRegisteredError,
    UnsupportedPredictionTypeError,
)


def _fit(**kwargs):
    return object()


def test_default_table_contents(registry):
    assert set(registry.engines()) == {
        ("proportional_hazards", "lifelines"),
        ("proportional_hazards", "sksurv"),
        ("proportional_hazards", "coxnet"),
        ("survival_reg", "lifelines"),
    }
    assert registry.families() == ["proportional_hazards", "survival_reg"]
    assert registry.pred_types("proportional_hazards", "coxnet") == ["survival", "linear_pred"]
    assert registry.pred_types("survival_reg", "lifelines") == [
        "time", "survival", "hazard", "quantile", "linear_pred",
    ]
    assert registry.lookup("proportional_hazards", "coxnet").kind is EngineKind.PATH
    assert registry.lookup("proportional_hazards", "sksurv").kind is EngineKind.STANDARD


def test_lookup_unknown_engine_lists_available(registry):
    with pytest.raises(NotRegisteredError) as exc:
        registry.lookup("proportional_hazards", "glmnet")

    assert exc.value.key == ("proportional_hazards", "glmnet")
    assert "Available" in str(exc.value)
    assert ("proportional_hazards", "coxnet") in exc.value.available


def test_unsupported_prediction_type(registry):
    with pytest.raises(UnsupportedPredictionTypeError) as exc:
        registry.lookup_pred("proportional_hazards", "sksurv", "time")

    assert exc.value.supported == ["survival", "linear_pred"]
    assert isinstance(exc.value, ConfigurationError)


def test_lookup_pred_accepts_enum(registry):
    recipe = registry.lookup_pred("survival_reg", "lifelines", PredictionType.HAZARD)
    assert recipe.func == "predict_hazard"


def test_duplicate_engine_rejected():
    builder = RegistryBuilder()
    builder.register("toy", "eng", FitRecipe(func=_fit), EncodingRules())

    with pytest.raises(ConfigurationError):
        builder.register("toy", "eng", FitRecipe(func=_fit), EncodingRules())


def test_set_pred_requires_declared_engine():
    builder = RegistryBuilder()
    with pytest.raises(ConfigurationError):
        builder.set_pred("toy", "eng", "censored regression", "time", PredictionRecipe(func="predict"))


def test_duplicate_prediction_recipe_rejected():
    builder = RegistryBuilder()
    builder.register("toy", "eng", FitRecipe(func=_fit), EncodingRules())
    builder.set_pred("toy", "eng", "censored regression", "time", PredictionRecipe(func="predict"))

    with pytest.raises(ConfigurationError):
        builder.set_pred("toy", "eng", "censored regression", "time", PredictionRecipe(func="predict"))


def test_only_censored_regression_mode():
    builder = RegistryBuilder()
    with pytest.raises(ConfigurationError):
        builder.set_model_engine("toy", "regression", "eng")


def test_builder_frozen_after_build():
    builder = RegistryBuilder()
    builder.register("toy", "eng", FitRecipe(func=_fit), EncodingRules())
    builder.build()

    with pytest.raises(ConfigurationError):
        builder.register("toy", "other", FitRecipe(func=_fit), EncodingRules())


def test_engine_without_fit_recipe_fails_build():
    builder = RegistryBuilder()
    builder.set_model_engine("toy", "censored regression", "eng")

    with pytest.raises(ConfigurationError):
        builder.build()


def test_recipes_are_read_only(registry):
    recipe = registry.lookup("proportional_hazards", "lifelines")

    with pytest.raises(TypeError):
        recipe.args["penalty"] = None
    with pytest.raises(TypeError):
        recipe.fit.defaults["x"] = 1


def test_independent_builds_share_nothing():
    first = build_registry()
    second = build_registry()

    assert first is not second
    assert first.engines() == second.engines()
    assert first.pred_keys() == second.pred_keys()


def test_show_engines(registry):
    rows = show_engines("proportional_hazards", registry=registry)

    assert [r["engine"] for r in rows] == ["lifelines", "sksurv", "coxnet"]
    assert rows[2]["kind"] == "path"
    assert "linear_pred" in rows[0]["types"]
