"""Service pipeline - ordered phases from request to response."""

from itemkeeper.pipeline.base import ServicePipeline
from itemkeeper.pipeline.context import PipelineContext
from itemkeeper.pipeline.exceptions import (
    DecorationException,
    PersistenceException,
    ServicePipelineException,
    ValidationException,
)

__all__ = [
    "ServicePipeline",
    "PipelineContext",
    "ServicePipelineException",
    "ValidationException",
    "DecorationException",
    "PersistenceException",
]
