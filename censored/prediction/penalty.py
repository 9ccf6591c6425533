# censored/prediction/penalty.py
from __future__ import annotations

from typing import Any, Sequence

import numpy as np

from censored.utils.errors import (
    AmbiguousStrengthError,
    IncompatibleStrengthError,
    InvalidArgumentError,
)


def resolve_penalty(
    penalty: Any,
    path: Sequence[float],
    spec_penalty: Any = None,
    multi: bool = False,
) -> float | np.ndarray:
    """
    Pick the strength(s) a path prediction is computed at.

    single call:
        explicit penalty > spec penalty > the only trained strength;
        several trained strengths and nothing requested is ambiguous.
    multi call:
        explicit penalties, else the full trained path; unique, ascending.

    A single-strength path serves only that strength. On a longer path any
    strength inside [min, max] is served by the native routine; outside it
    is rejected.
    """
    path = np.sort(np.atleast_1d(np.asarray(path, dtype=float)).reshape(-1))
    if path.size == 0:
        raise IncompatibleStrengthError("the fitted path holds no strengths", path)

    if multi:
        values = path if penalty is None else _as_values(penalty)
        for value in values:
            _check_strength(float(value), path)
        return np.unique(values)

    requested = penalty if penalty is not None else spec_penalty
    if requested is None:
        if path.size == 1:
            return float(path[0])
        raise AmbiguousStrengthError(
            f"the path holds {path.size} strengths; pass `penalty` to choose one",
            path,
        )

    values = _as_values(requested)
    if values.size != 1:
        raise InvalidArgumentError(
            "penalty",
            f"a single value is required, got {values.size}. "
            f"Use multi_predict() for several strengths",
            count=int(values.size),
        )
    value = float(values[0])
    _check_strength(value, path)
    return value


def _as_values(penalty: Any) -> np.ndarray:
    values = np.atleast_1d(np.asarray(penalty, dtype=float)).reshape(-1)
    if values.size == 0:
        raise InvalidArgumentError("penalty", "no strength given", count=0)
    if not np.isfinite(values).all() or (values < 0).any():
        raise InvalidArgumentError("penalty", "strengths must be finite and non-negative")
    return values


def _check_strength(value: float, path: np.ndarray) -> None:
    if path.size == 1:
        if not np.isclose(value, path[0]):
            raise IncompatibleStrengthError(
                f"the model was trained at penalty={path[0]:g} only; "
                f"got penalty={value:g}. Refit with the requested strength",
                path,
                value,
            )
        return

    low, high = path[0], path[-1]
    inside = (value >= low or np.isclose(value, low)) and (value <= high or np.isclose(value, high))
    if not inside:
        raise IncompatibleStrengthError(
            f"penalty={value:g} is outside the trained path [{low:g}, {high:g}]",
            path,
            value,
        )
