# Copyright (c) 2024 OpenMined
# SPDX-License-Identifier: Apache-2.0
"""Runner submodule for executing batches of context operations.

Usage:
    python -m scope_context.runner < input.json > output.json

Exports:
    Executor: Runs operations against a ScopeContext
    BlobStoreFactory: Creates blob stores from configuration
    RunnerInput: Input schema
    RunnerOutput: Output schema
"""

from .executor import ExecutionError, Executor
from .factory import BlobStoreFactory, BlobStoreFactoryError
from .schema import (
    BlobStoreConfigSchema,
    OperationResultSchema,
    OperationSchema,
    RunnerInput,
    RunnerOutput,
)

__all__ = [
    "BlobStoreConfigSchema",
    "BlobStoreFactory",
    "BlobStoreFactoryError",
    "ExecutionError",
    "Executor",
    "OperationResultSchema",
    "OperationSchema",
    "RunnerInput",
    "RunnerOutput",
]
