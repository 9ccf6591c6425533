# censored/prediction/context.py
from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Dict, Optional

import numpy as np
import pandas as pd

from censored.fitting.fitted_model import FittedModel, PathFittedModel
from censored.registry.recipes import PredictionType, Slot
from censored.utils.errors import InvalidArgumentError

_NEEDS_TIME = (PredictionType.SURVIVAL, PredictionType.HAZARD)


@dataclass(frozen=True)
class PredictionContext:
    """
    Everything one native prediction call needs.

    time:      evaluation times in the caller's order (duplicates kept)
    eval_time: sorted unique times actually sent to the engine
    quantile:  requested quantile probabilities
    levels:    the quantile levels in the engine's own convention
    """
    fitted: FittedModel
    type: PredictionType
    new_data: pd.DataFrame
    index: pd.Index
    time: Optional[np.ndarray] = None
    eval_time: Optional[np.ndarray] = None
    quantile: Optional[np.ndarray] = None
    levels: Optional[np.ndarray] = None
    penalty: Optional[float] = None

    @property
    def n_rows(self) -> int:
        return len(self.index)

    def replace(self, **changes: Any) -> "PredictionContext":
        return dataclasses.replace(self, **changes)

    def slots(self) -> Dict[Slot, Any]:
        values = {
            Slot.FIT: self.fitted.fit,
            Slot.NEW_DATA: self.new_data,
            Slot.EVAL_TIME: self.eval_time,
            Slot.QUANTILE: self.quantile if self.levels is None else self.levels,
            Slot.PENALTY: self.penalty,
        }
        if isinstance(self.fitted, PathFittedModel) and self.fitted.training_cache is not None:
            values[Slot.TRAINING] = self.fitted.training_cache.as_tuple()
        return values


def coerce_type(type: PredictionType | str) -> PredictionType:
    try:
        return PredictionType.coerce(type)
    except ValueError:
        raise InvalidArgumentError(
            "type",
            f"unknown prediction type {type!r}. "
            f"Expected one of: {', '.join(t.value for t in PredictionType)}",
        ) from None


def build_context(
    fitted: FittedModel,
    type: PredictionType,
    new_data: pd.DataFrame,
    *,
    time: Any = None,
    quantile: Any = None,
) -> PredictionContext:
    if not isinstance(new_data, pd.DataFrame):
        raise InvalidArgumentError(
            "new_data", f"expected a DataFrame, got {new_data.__class__.__name__}"
        )
    if new_data.empty:
        raise InvalidArgumentError("new_data", "no rows to predict")

    requested_time = eval_time = None
    if type in _NEEDS_TIME:
        requested_time = _times(time)
        eval_time = np.unique(requested_time)

    requested_q = None
    if type is PredictionType.QUANTILE:
        requested_q = _quantiles(quantile)

    encoded = fitted.blueprint.transform(new_data)
    return PredictionContext(
        fitted=fitted,
        type=type,
        new_data=encoded,
        index=new_data.index,
        time=requested_time,
        eval_time=eval_time,
        quantile=requested_q,
    )


def _times(time: Any) -> np.ndarray:
    if time is None:
        raise InvalidArgumentError("time", "evaluation times are required for survival and hazard")
    values = np.atleast_1d(np.asarray(time, dtype=float)).reshape(-1)
    if values.size == 0:
        raise InvalidArgumentError("time", "at least one evaluation time is required")
    if not np.isfinite(values).all() or (values < 0).any():
        raise InvalidArgumentError("time", "evaluation times must be finite and non-negative")
    return values


def _quantiles(quantile: Any) -> np.ndarray:
    if quantile is None:
        raise InvalidArgumentError("quantile", "quantile levels are required")
    values = np.atleast_1d(np.asarray(quantile, dtype=float)).reshape(-1)
    if values.size == 0:
        raise InvalidArgumentError("quantile", "at least one quantile level is required")
    if not ((values > 0) & (values < 1)).all():
        raise InvalidArgumentError("quantile", "quantile levels must lie strictly between 0 and 1")
    return values
