from .defaults import build_registry, default_registry
from .recipes import (
    EncodingRules,
    EngineKind,
    EngineRecipe,
    FitRecipe,
    Interface,
    ModelArg,
    PredictionRecipe,
    PredictionType,
    Slot,
)
from .registry import EngineRegistry, RegistryBuilder

__all__ = [
    "build_registry",
    "default_registry",
    "EncodingRules",
    "EngineKind",
    "EngineRecipe",
    "FitRecipe",
    "Interface",
    "ModelArg",
    "PredictionRecipe",
    "PredictionType",
    "Slot",
    "EngineRegistry",
    "RegistryBuilder",
]
