"""Dimension evaluators and their registry."""

from typing import Dict, Optional, Type

from ..config import MetricsConfig
from ..exceptions import InvalidDimensionError
from .architecture import ArchitectureDimension
from .base import DimensionEvaluator
from .callables import CallablesDimension
from .code_style import CodeStyleDimension
from .complexity import ComplexityDimension
from .maintainability import MaintainabilityDimension
from .relationships import RelationshipsDimension
from .template_files import TemplateFilesDimension

# Report order
DIMENSIONS: Dict[str, Type] = {
    TemplateFilesDimension.slug: TemplateFilesDimension,
    ComplexityDimension.slug: ComplexityDimension,
    CallablesDimension.slug: CallablesDimension,
    CodeStyleDimension.slug: CodeStyleDimension,
    ArchitectureDimension.slug: ArchitectureDimension,
    MaintainabilityDimension.slug: MaintainabilityDimension,
    RelationshipsDimension.slug: RelationshipsDimension,
}


def get_dimension(slug: str, config: Optional[MetricsConfig] = None) -> DimensionEvaluator:
    """Get an evaluator instance by slug.

    Args:
        slug: One of the keys of DIMENSIONS, e.g. "code-style"
        config: Scoring constants; defaults to MetricsConfig()

    Raises:
        InvalidDimensionError: If slug is not recognized
    """
    cls = DIMENSIONS.get(slug)
    if cls is None:
        raise InvalidDimensionError(slug, DIMENSIONS)
    return cls(config)


def all_dimensions(config: Optional[MetricsConfig] = None) -> Dict[str, DimensionEvaluator]:
    return {slug: cls(config) for slug, cls in DIMENSIONS.items()}


__all__ = [
    "DIMENSIONS",
    "ArchitectureDimension",
    "CallablesDimension",
    "CodeStyleDimension",
    "ComplexityDimension",
    "DimensionEvaluator",
    "MaintainabilityDimension",
    "RelationshipsDimension",
    "TemplateFilesDimension",
    "all_dimensions",
    "get_dimension",
]
