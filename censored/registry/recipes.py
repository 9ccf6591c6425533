# censored/registry/recipes.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Literal, Mapping, Optional


class EngineKind(str, Enum):
    STANDARD = "standard"
    # fit holds a whole regularization path
    PATH = "path"


class Interface(str, Enum):
    # native fit consumes the encoded frame plus outcome column names
    FRAME = "frame"
    # native fit consumes a predictor matrix x and a structured outcome y
    MATRIX = "matrix"


class PredictionType(str, Enum):
    TIME = "time"
    SURVIVAL = "survival"
    HAZARD = "hazard"
    QUANTILE = "quantile"
    LINEAR_PRED = "linear_pred"

    @classmethod
    def coerce(cls, value: "PredictionType | str") -> "PredictionType":
        return value if isinstance(value, cls) else cls(value)


class Slot(str, Enum):
    """
    Placeholders in a prediction args template, bound at call time.
    """
    FIT = "fit"
    NEW_DATA = "new_data"
    EVAL_TIME = "eval_time"
    QUANTILE = "quantile"
    PENALTY = "penalty"
    # training copy retained by path engines
    TRAINING = "training"


def _frozen(d: Mapping[str, Any] | None) -> Mapping[str, Any]:
    return MappingProxyType(dict(d or {}))


# ============================================================
# Fit side
# ============================================================
@dataclass(frozen=True)
class EncodingRules:
    """
    How predictors are turned into what the native routine consumes.
    """
    predictor_indicators: Literal["none", "traditional", "one_hot"] = "none"
    compute_intercept: bool = False
    remove_intercept: bool = False
    allow_sparse_x: bool = False


@dataclass(frozen=True)
class FitRecipe:
    func: Callable[..., Any]
    interface: Interface = Interface.FRAME
    protect: tuple[str, ...] = ()
    defaults: Mapping[str, Any] = field(default_factory=lambda: _frozen(None))
    # MATRIX interface only: (time, event) -> native outcome object
    outcome: Optional[Callable[..., Any]] = None

    def __post_init__(self):
        object.__setattr__(self, "interface", Interface(self.interface))
        if self.interface is Interface.MATRIX and self.outcome is None:
            raise ValueError("matrix-interface fit recipes need an outcome builder")
        object.__setattr__(self, "defaults", _frozen(self.defaults))
        object.__setattr__(self, "protect", tuple(self.protect))


@dataclass(frozen=True)
class ModelArg:
    """
    standard name -> native name. has_submodel marks the argument the
    path engine derives internally (dropped from the native fit call).
    """
    parsnip: str
    original: str
    has_submodel: bool = False


@dataclass(frozen=True)
class EngineRecipe:
    family: str
    engine: str
    mode: str
    kind: EngineKind
    fit: FitRecipe
    encoding: EncodingRules
    args: Mapping[str, ModelArg] = field(default_factory=lambda: _frozen(None))

    def __post_init__(self):
        object.__setattr__(self, "args", _frozen(self.args))

    @property
    def key(self) -> tuple[str, str]:
        return self.family, self.engine


# ============================================================
# Prediction side
# ============================================================
@dataclass(frozen=True)
class PredictionRecipe:
    """
    PredictionRecipe (FROZEN)

    - func: callable, or the name of a method on the native fit object
    - args: template; Slot values are bound at call time, everything
            else is passed literally
    - pre:  optional hook(ctx) -> ctx run before the native call
    - post: optional hook(raw, ctx) -> standardized array
    """
    func: Callable[..., Any] | str
    args: Mapping[str, Any] = field(default_factory=lambda: _frozen(None))
    pre: Optional[Callable[..., Any]] = None
    post: Optional[Callable[..., Any]] = None

    def __post_init__(self):
        object.__setattr__(self, "args", _frozen(self.args))

    def bind(self, values: Mapping[Slot, Any]) -> dict[str, Any]:
        bound = {}
        for name, value in self.args.items():
            if isinstance(value, Slot):
                if value not in values:
                    raise KeyError(f"slot {value.value!r} is not available for binding")
                bound[name] = values[value]
            else:
                bound[name] = value
        return bound

    def invoke(self, values: Mapping[Slot, Any]) -> Any:
        kwargs = self.bind(values)
        if isinstance(self.func, str):
            target = getattr(values[Slot.FIT], self.func)
            return target(**kwargs)
        return self.func(**kwargs)
