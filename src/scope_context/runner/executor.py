# Copyright (c) 2024 OpenMined
# SPDX-License-Identifier: Apache-2.0
"""Executor for running a batch of context operations.

Orchestrates the full execution flow:
1. Validate settings
2. Create the blob store from configuration
3. Run each operation in order, stopping at the first failure
4. Return structured result
"""

from __future__ import annotations

import logging

from scope_context import MISSING, ScopeContext
from scope_context.blobs import BlobStore
from scope_context.exceptions import ContextValidationError
from scope_context.settings import load_settings

from .factory import BlobStoreFactory, BlobStoreFactoryError
from .schema import OperationResultSchema, OperationSchema, RunnerInput, RunnerOutput

logger = logging.getLogger(__name__)


class ExecutionError(Exception):
    """Raised when an operation fails."""

    def __init__(self, index: int, cause: Exception) -> None:
        self.index = index
        self.cause = cause
        super().__init__(str(cause))


class Executor:
    """Executes a batch of operations against one ScopeContext.

    The executor is designed for dependency injection to support testing.
    Pass a custom blob store to the constructor to override store creation.

    Example:
        executor = Executor()
        output = await executor.execute(input_data)

        # For testing with an in-memory store:
        executor = Executor(blob_store=InMemoryBlobStore())
    """

    def __init__(self, blob_store: BlobStore | None = None) -> None:
        """Initialize executor with optional injected blob store.

        Args:
            blob_store: Optional store to use instead of creating from config.
                        Useful for testing.
        """
        self._injected_store = blob_store

    async def execute(self, input_data: RunnerInput) -> RunnerOutput:
        """Run every operation and report the outcome.

        Note:
            This method catches all exceptions and returns them as
            RunnerOutput errors, ensuring valid JSON is always returned.
        """
        results: list[OperationResultSchema] = []
        try:
            await self._execute_internal(input_data, results)
        except ExecutionError as e:
            return RunnerOutput(
                success=False,
                results=results,
                error=str(e),
                error_type=type(e.cause).__name__,
                failed_index=e.index,
            )
        except BlobStoreFactoryError as e:
            return RunnerOutput(
                success=False,
                error=str(e),
                error_type="BlobStoreFactoryError",
            )
        except Exception as e:
            return RunnerOutput(
                success=False,
                results=results,
                error=str(e),
                error_type=type(e).__name__,
            )
        return RunnerOutput(success=True, results=results)

    async def _execute_internal(
        self,
        input_data: RunnerInput,
        results: list[OperationResultSchema],
    ) -> None:
        """Internal execution logic.

        Completed operation results are appended to *results* as they finish
        so partial progress survives a failure.
        """
        settings = load_settings(input_data.settings)
        blob_store = self._injected_store or BlobStoreFactory.create(input_data.store, settings)
        owns_store = self._injected_store is None

        ctx = ScopeContext(settings, blob_store=blob_store)
        try:
            for index, operation in enumerate(input_data.operations):
                try:
                    results.append(await self._run_operation(ctx, operation))
                except Exception as e:
                    logger.debug("Operation %d (%s) failed: %s", index, operation.op, e)
                    raise ExecutionError(index, e) from e
        finally:
            if owns_store:
                await blob_store.close()

    async def _run_operation(
        self,
        ctx: ScopeContext,
        operation: OperationSchema,
    ) -> OperationResultSchema:
        """Dispatch one operation to the context."""
        result = OperationResultSchema(op=operation.op, scope=operation.scope)

        if operation.op == "clear_cache":
            ctx.clear_cache()
            return result
        if operation.op == "clean":
            await ctx.clean(operation.scopes or self._require_scope(operation))
            return result

        scope = self._require_scope(operation)
        if operation.op == "get":
            values = await ctx.get(scope, operation.keys)
            for key, value in zip(operation.keys, values, strict=True):
                if value is MISSING:
                    result.values[key] = None
                    result.missing.append(key)
                else:
                    result.values[key] = value
        elif operation.op == "set":
            await ctx.set(scope, operation.keys, operation.values)
        elif operation.op == "keys":
            result.keys = await ctx.keys(scope)
        elif operation.op == "delete":
            await ctx.delete(scope)
        return result

    @staticmethod
    def _require_scope(operation: OperationSchema) -> str:
        if not operation.scope:
            raise ContextValidationError(f"Operation '{operation.op}' requires a scope")
        return operation.scope
