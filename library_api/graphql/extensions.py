"""
GraphQL Schema Extensions

RejectInvalidCredentials aborts an operation whose bearer token failed
verification. The context getter cannot return a GraphQL error itself, so
it records the error on the context and this extension turns it into the
operation result before execution starts. No resolver runs and the
response carries `data: null` with a single UNAUTHORIZED error.
"""

import logging
from collections.abc import Iterator

from graphql import ExecutionResult
from strawberry.extensions import SchemaExtension

logger = logging.getLogger(__name__)


class RejectInvalidCredentials(SchemaExtension):
    """Short-circuit execution when the context holds an auth error."""

    def on_execute(self) -> Iterator[None]:
        context = self.execution_context.context
        auth_error = getattr(context, "auth_error", None)

        if auth_error is not None:
            logger.warning(
                f"Rejected {self.execution_context.operation_name or 'anonymous operation'}: "
                f"{auth_error.message}"
            )
            # Strawberry skips execution when a result is already set
            self.execution_context.result = ExecutionResult(
                data=None,
                errors=[auth_error],
            )

        yield
