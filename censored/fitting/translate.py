# censored/fitting/translate.py
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping, Optional

import numpy as np

from censored import logs
from censored.registry.recipes import EngineKind, EngineRecipe
from censored.registry.registry import EngineRegistry
from censored.spec import deferred
from censored.spec.deferred import DataInfo
from censored.spec.model_spec import ModelSpec
from censored.utils.errors import InvalidArgumentError


@dataclass(frozen=True)
class TranslatedArgs:
    """
    native: keyword arguments for the native fit routine (native names)
    spec:   the model spec with every standardized arg evaluated
    recipe: the engine recipe used for the translation
    """
    native: Mapping[str, Any]
    spec: ModelSpec
    recipe: EngineRecipe


def translate(
    spec: ModelSpec,
    registry: Optional[EngineRegistry] = None,
    data_info: Optional[DataInfo] = None,
) -> TranslatedArgs:
    if registry is None:
        from censored.registry.defaults import default_registry

        registry = default_registry()

    if spec.engine is None:
        raise InvalidArgumentError("engine", f"no engine set for {spec.family}")
    recipe = registry.lookup(spec.family, spec.engine)

    # every Deferred is evaluated here and only here
    resolved = {name: deferred.evaluate(v, data_info) for name, v in spec.args.items()}

    if recipe.kind is EngineKind.PATH:
        resolved["penalty"] = _single_penalty(resolved.get("penalty"), spec.engine)

    native: dict[str, Any] = {}
    for name, value in resolved.items():
        if value is None:
            continue
        arg = recipe.args.get(name)
        if arg is None:
            logs.warning(
                f"[Translate] `{name}` is not used by engine '{spec.engine}' "
                f"of {spec.family}; ignored"
            )
            continue
        if arg.has_submodel and recipe.kind is EngineKind.PATH:
            continue
        native[arg.original] = value

    protected = set(recipe.fit.protect)
    for name, value in spec.engine_args.items():
        if name in protected:
            logs.warning(
                f"[Translate] engine argument `{name}` is set by the fit itself; dropped"
            )
            continue
        native[name] = deferred.evaluate(value, data_info)

    for name, value in recipe.fit.defaults.items():
        native.setdefault(name, value)

    return TranslatedArgs(
        native=MappingProxyType(native),
        spec=spec.with_args(resolved),
        recipe=recipe,
    )


def _single_penalty(value: Any, engine: str) -> Optional[float]:
    if value is None:
        return None
    values = np.atleast_1d(np.asarray(value, dtype=float)).reshape(-1)
    if values.size != 1:
        raise InvalidArgumentError(
            "penalty",
            f"engine '{engine}' needs a single value, got {values.size}. "
            f"Explore several strengths with multi_predict() instead",
            count=int(values.size),
        )
    return float(values[0])
