#!filepath: tests/registry/test_recipes.py
from __future__ import annotations

import pytest

from censored.registry import FitRecipe, Interface, PredictionRecipe, Slot


class _Native:
    def predict(self, X, scale=1):
        return [v * scale for v in X]


def test_bind_replaces_slots_only():
    recipe = PredictionRecipe(func="predict", args={"X": Slot.NEW_DATA, "scale": 2})

    bound = recipe.bind({Slot.NEW_DATA: [1, 2]})

    assert bound == {"X": [1, 2], "scale": 2}


def test_invoke_method_name_on_fit_object():
    recipe = PredictionRecipe(func="predict", args={"X": Slot.NEW_DATA, "scale": 3})

    out = recipe.invoke({Slot.FIT: _Native(), Slot.NEW_DATA: [1, 2]})

    assert out == [3, 6]


def test_invoke_callable():
    recipe = PredictionRecipe(
        func=lambda model, data: (model, data),
        args={"model": Slot.FIT, "data": Slot.NEW_DATA},
    )

    assert recipe.invoke({Slot.FIT: "m", Slot.NEW_DATA: "d"}) == ("m", "d")


def test_missing_slot_value():
    recipe = PredictionRecipe(func="predict", args={"X": Slot.EVAL_TIME})

    with pytest.raises(KeyError):
        recipe.bind({Slot.NEW_DATA: []})


def test_matrix_fit_recipe_needs_outcome_builder():
    with pytest.raises(ValueError):
        FitRecipe(func=lambda **kw: None, interface="matrix")

    recipe = FitRecipe(func=lambda **kw: None, interface="matrix", outcome=lambda t, e: None)
    assert recipe.interface is Interface.MATRIX
