"""Value inference for query builder capability calls."""

from .engine import ValueInferenceEngine, supported_values
from .factories import FactoryValueExtractor

__all__ = ["FactoryValueExtractor", "ValueInferenceEngine", "supported_values"]
