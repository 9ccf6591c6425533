# censored/registry/registry.py
from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from censored import logs
from censored.registry.recipes import (
    EncodingRules,
    EngineKind,
    EngineRecipe,
    FitRecipe,
    ModelArg,
    PredictionRecipe,
    PredictionType,
)
from censored.spec.model_spec import CENSORED_REGRESSION
from censored.utils.errors import (
    ConfigurationError,
    NotRegisteredError,
    UnsupportedPredictionTypeError,
)

EngineKey = Tuple[str, str]
PredKey = Tuple[str, str, str]


class EngineRegistry:
    """
    EngineRegistry (FROZEN)

    Semantics:
    - built once by RegistryBuilder.build()
    - read-only afterwards; safe to share across threads
    - keyed by (family, engine) and (family, engine, type)
    """

    def __init__(
        self,
        engines: Mapping[EngineKey, EngineRecipe],
        preds: Mapping[PredKey, PredictionRecipe],
    ):
        self._engines = MappingProxyType(dict(engines))
        self._preds = MappingProxyType(dict(preds))

    # ------------------------------------------------------------------
    # lookup
    # ------------------------------------------------------------------
    def lookup(self, family: str, engine: str) -> EngineRecipe:
        key = (family, engine)
        if key not in self._engines:
            raise NotRegisteredError(key, list(self._engines))
        return self._engines[key]

    def lookup_pred(
        self, family: str, engine: str, type: PredictionType | str
    ) -> PredictionRecipe:
        self.lookup(family, engine)
        ptype = PredictionType.coerce(type)
        key = (family, engine, ptype.value)
        if key not in self._preds:
            raise UnsupportedPredictionTypeError(
                family, engine, ptype.value, self.pred_types(family, engine)
            )
        return self._preds[key]

    # ------------------------------------------------------------------
    # introspection
    # ------------------------------------------------------------------
    def __contains__(self, key: object) -> bool:
        return key in self._engines

    def families(self) -> List[str]:
        return sorted({family for family, _ in self._engines})

    def engines(self, family: Optional[str] = None) -> List[EngineKey]:
        return [k for k in self._engines if family is None or k[0] == family]

    def pred_types(self, family: str, engine: str) -> List[str]:
        return [
            t.value
            for t in PredictionType
            if (family, engine, t.value) in self._preds
        ]

    def pred_keys(self) -> List[PredKey]:
        return list(self._preds)


class RegistryBuilder:
    """
    Mutable staging area for registrations; build() freezes it.

    Mirrors the host registry API: set_model_engine / set_model_arg /
    set_fit / set_encoding / set_pred, one call per tuple.
    """

    def __init__(self):
        self._kinds: Dict[EngineKey, EngineKind] = {}
        self._args: Dict[EngineKey, Dict[str, ModelArg]] = {}
        self._fits: Dict[EngineKey, FitRecipe] = {}
        self._encodings: Dict[EngineKey, EncodingRules] = {}
        self._preds: Dict[PredKey, PredictionRecipe] = {}
        self._built = False

    # ------------------------------------------------------------------
    # host registry API
    # ------------------------------------------------------------------
    def set_model_engine(
        self,
        model: str,
        mode: str,
        eng: str,
        kind: EngineKind = EngineKind.STANDARD,
    ) -> None:
        self._check_open()
        self._check_mode(mode)
        key = (model, eng)
        if key in self._kinds:
            raise ConfigurationError(f"Engine {key} is already registered")
        self._kinds[key] = EngineKind(kind)
        self._args[key] = {}

    def set_model_arg(
        self,
        model: str,
        eng: str,
        parsnip: str,
        original: str,
        has_submodel: bool = False,
    ) -> None:
        key = self._known(model, eng)
        self._args[key][parsnip] = ModelArg(parsnip, original, has_submodel)

    def set_fit(self, model: str, eng: str, mode: str, value: FitRecipe) -> None:
        self._check_mode(mode)
        key = self._known(model, eng)
        if key in self._fits:
            raise ConfigurationError(f"Fit recipe for {key} is already set")
        self._fits[key] = value

    def set_encoding(self, model: str, eng: str, mode: str, options: EncodingRules) -> None:
        self._check_mode(mode)
        key = self._known(model, eng)
        self._encodings[key] = options

    def set_pred(
        self,
        model: str,
        eng: str,
        mode: str,
        type: PredictionType | str,
        value: PredictionRecipe,
    ) -> None:
        self._check_mode(mode)
        self._known(model, eng)
        pkey = (model, eng, PredictionType.coerce(type).value)
        if pkey in self._preds:
            raise ConfigurationError(f"Prediction recipe for {pkey} is already set")
        self._preds[pkey] = value

    # ------------------------------------------------------------------
    # convenience
    # ------------------------------------------------------------------
    def register(
        self,
        family: str,
        engine: str,
        fit_recipe: FitRecipe,
        encoding_rules: EncodingRules,
        *,
        kind: EngineKind = EngineKind.STANDARD,
        args: Iterable[ModelArg] = (),
    ) -> None:
        self.set_model_engine(family, CENSORED_REGRESSION, engine, kind)
        for arg in args:
            self.set_model_arg(family, engine, arg.parsnip, arg.original, arg.has_submodel)
        self.set_fit(family, engine, CENSORED_REGRESSION, fit_recipe)
        self.set_encoding(family, engine, CENSORED_REGRESSION, encoding_rules)

    def build(self) -> EngineRegistry:
        self._check_open()
        engines: Dict[EngineKey, EngineRecipe] = {}
        for key, kind in self._kinds.items():
            if key not in self._fits:
                raise ConfigurationError(f"Engine {key} has no fit recipe")
            if key not in self._encodings:
                raise ConfigurationError(f"Engine {key} has no encoding rules")
            engines[key] = EngineRecipe(
                family=key[0],
                engine=key[1],
                mode=CENSORED_REGRESSION,
                kind=kind,
                fit=self._fits[key],
                encoding=self._encodings[key],
                args=self._args[key],
            )

        self._built = True
        logs.debug(
            f"[Registry] built engines={len(engines)} prediction_recipes={len(self._preds)}"
        )
        return EngineRegistry(engines, self._preds)

    # ------------------------------------------------------------------
    # internal
    # ------------------------------------------------------------------
    def _known(self, model: str, eng: str) -> EngineKey:
        self._check_open()
        key = (model, eng)
        if key not in self._kinds:
            raise ConfigurationError(
                f"Engine {key} must be declared with set_model_engine() first"
            )
        return key

    def _check_open(self) -> None:
        if self._built:
            raise ConfigurationError("Registry is frozen; registrations happen before build()")

    @staticmethod
    def _check_mode(mode: str) -> None:
        if mode != CENSORED_REGRESSION:
            raise ConfigurationError(
                f"Only mode '{CENSORED_REGRESSION}' is supported, got '{mode}'"
            )
