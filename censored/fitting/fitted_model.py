# censored/fitting/fitted_model.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import numpy as np
import pandas as pd

from censored.fitting.encoding import EncodingBlueprint
from censored.registry.recipes import EngineKind
from censored.spec.formula import SurvFormula
from censored.spec.model_spec import ModelSpec
from censored.utils.errors import FitFailedError, NativeFitFailure


@dataclass(frozen=True)
class TrainingCache:
    """
    Encoded training predictors + native outcome, kept for path re-querying.
    """
    x: pd.DataFrame
    y: Any

    def as_tuple(self) -> tuple[pd.DataFrame, Any]:
        return self.x, self.y


@dataclass(frozen=True)
class FittedModel:
    """
    FittedModel (FINAL / FROZEN)

    Semantics:
    - produced by exactly one fit() call, read-only afterwards
    - `kind` tags the variant; the router switches on it explicitly
    - a failed native fit still yields a FittedModel carrying `failure`
    """
    spec: ModelSpec
    fit: Any
    formula: SurvFormula
    blueprint: Optional[EncodingBlueprint]
    elapsed: float
    failure: Optional[NativeFitFailure] = None

    kind = EngineKind.STANDARD

    @property
    def family(self) -> str:
        return self.spec.family

    @property
    def engine(self) -> str:
        return self.spec.engine

    @property
    def failed(self) -> bool:
        return self.failure is not None

    def check(self) -> None:
        if self.failure is not None:
            raise FitFailedError(self.failure)

    def __repr__(self) -> str:
        state = "FAILED" if self.failed else f"{self.elapsed:.3f}s"
        return f"<FittedModel {self.spec!r} {self.formula} ({state})>"


@dataclass(frozen=True, repr=False)
class PathFittedModel(FittedModel):
    """
    Fit of a path engine: one native object holding every trained strength.
    """
    training_cache: Optional[TrainingCache] = None

    kind = EngineKind.PATH

    @property
    def path(self) -> np.ndarray:
        """
        Trained strengths, ascending.
        """
        return np.sort(np.asarray(self.fit.alphas_, dtype=float))
