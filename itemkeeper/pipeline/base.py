"""
Base class for all endpoint pipelines.

A pipeline turns one request into one response through six ordered phases:

    1. Input validation     - structural checks on the raw request
    2. Context creation     - build the typed per-request context
    3. Decoration           - enrich the context from collaborators
    4. Business validation  - rules that need the decorated context
    5. Persistence          - writes (only if requires_persistence)
    6. Response building    - plain dict (or model) from the final context

Phases 1 and 4 collect every violation into a ValidationResult and fail
with a single ValidationException listing all of them. Phases 3 and 5
fail with DecorationException / PersistenceException. Every failure that
leaves execute(), including an input-validation failure, carries the request
id and operation in its context. Failures are logged at WARNING; reporting
them to error tracking is left to the transport. There is no retry inside
the pipeline.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from itemkeeper.core.utils import generate_request_id
from itemkeeper.core.validation import ValidationResult
from itemkeeper.pipeline.context import PipelineContext
from itemkeeper.pipeline.exceptions import (
    DecorationException,
    PersistenceException,
    ServicePipelineException,
    ValidationException,
)

logger = logging.getLogger(__name__)

RequestT = TypeVar("RequestT")
ContextT = TypeVar("ContextT", bound=PipelineContext)
ResponseT = TypeVar("ResponseT")


class ServicePipeline(ABC, Generic[RequestT, ContextT, ResponseT]):
    """
    Template for one endpoint.

    Example:
        class GetThingService(ServicePipeline[GetThingRequest, ThingContext, dict]):
            operation = "get_thing"

            def create_context(self, request):
                return ThingContext(thing_id=request.thing_id)

            async def decorate(self, context):
                context.thing = await self.store.get(context.thing_id)

            def build_response(self, context):
                return {"thing": context.thing, "requestId": context.request_id}
    """

    # Name recorded in failure context for tracing
    operation: str = "unknown"

    # Read operations leave this False; writes set it to True
    requires_persistence: bool = False

    async def execute(self, request: RequestT) -> ResponseT:
        """
        Run the pipeline.

        Raises:
            ValidationException: Phase 1 or 4 rejected the request
            DecorationException: Phase 3 failed
            PersistenceException: Phase 5 failed
            ServicePipelineException: Anything else went wrong
        """
        request_id = generate_request_id()
        try:
            # Phase 1
            input_result = self.validate_input(request)
            if not input_result.is_valid:
                raise ValidationException(input_result.errors_as_string(), result=input_result)

            # Phase 2
            context = self.create_context(request)
            context.request_id = request_id
            context.add_metadata("operation", self.operation)
            logger.debug(f"[{context.request_id}] {self.operation}: context created")

            # Phase 3
            await self._run_decoration(context)

            # Phase 4
            business_result = self.validate_business(context)
            if not business_result.is_valid:
                raise ValidationException(business_result.errors_as_string(), result=business_result)

            warnings = input_result.warnings + business_result.warnings
            if warnings:
                context.add_metadata("warnings", warnings)

            # Phase 5
            if self.requires_persistence:
                await self._run_persistence(context)

            # Phase 6
            return self.build_response(context)

        except ServicePipelineException as e:
            e.add_context_if_missing("operation", self.operation)
            e.add_context_if_missing("requestId", request_id)
            logger.debug(f"{self.operation} failed: {e}")
            raise
        except Exception as e:
            wrapped = ServicePipelineException("Pipeline execution failed")
            wrapped.add_context("operation", self.operation)
            wrapped.add_context("requestId", request_id)
            logger.warning(f"{self.operation}: unexpected failure: {e!r}")
            raise wrapped from e

    async def _run_decoration(self, context: ContextT) -> None:
        try:
            await self.decorate(context)
        except ServicePipelineException:
            raise
        except Exception as e:
            logger.warning(f"[{context.request_id}] {self.operation}: decoration failed: {e!r}")
            raise DecorationException(f"Failed to enrich {self.operation} context") from e

    async def _run_persistence(self, context: ContextT) -> None:
        try:
            await self.persist(context)
        except ServicePipelineException:
            raise
        except Exception as e:
            logger.warning(f"[{context.request_id}] {self.operation}: persistence failed: {e!r}")
            raise PersistenceException(f"Failed to persist {self.operation}") from e

    # -------------------------------------------------------------------------
    # Phases
    # -------------------------------------------------------------------------

    def validate_input(self, request: RequestT) -> ValidationResult:
        """Phase 1. Collect every structural problem with the request."""
        return ValidationResult()

    @abstractmethod
    def create_context(self, request: RequestT) -> ContextT:
        """Phase 2. Build a fresh context for this request."""
        pass

    async def decorate(self, context: ContextT) -> None:
        """Phase 3. Fetch whatever later phases need."""
        pass

    def validate_business(self, context: ContextT) -> ValidationResult:
        """
        Phase 4. Rules that need the decorated context.

        Must not mutate the context: running it twice gives the same result.
        """
        return ValidationResult()

    async def persist(self, context: ContextT) -> None:
        """Phase 5. Only called when requires_persistence is True."""
        pass

    @abstractmethod
    def build_response(self, context: ContextT) -> ResponseT:
        """Phase 6. Build the response from the final context."""
        pass

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(operation={self.operation})>"
