"""Mutation gate: operation-kind policy applied before any network call."""

from __future__ import annotations

from graphql import (
    DocumentNode,
    GraphQLError,
    OperationDefinitionNode,
    OperationType,
    parse,
)

from query.domain.value_objects import (
    BlockReason,
    GateDecision,
    GateState,
    OperationKind,
)

MUTATIONS_DISABLED_MESSAGE = (
    "Mutations are not allowed unless you enable them in the configuration. "
    "Please use a query operation instead."
)


class MutationGate:
    """Parses query text and blocks mutations unless they are enabled.

    A document is classified as a mutation when *any* of its operation
    definitions is a mutation, so a multi-operation document cannot
    smuggle a mutation past the gate.
    """

    def __init__(self, allow_mutations: bool = False):
        self._allow_mutations = allow_mutations

    @property
    def allow_mutations(self) -> bool:
        return self._allow_mutations

    @staticmethod
    def classify(document: DocumentNode) -> OperationKind:
        """Classify a parsed document by operation kind.

        Documents without operation definitions (fragments only) are
        classified as queries.
        """
        operations = [
            definition
            for definition in document.definitions
            if isinstance(definition, OperationDefinitionNode)
        ]
        if any(op.operation is OperationType.MUTATION for op in operations):
            return OperationKind.MUTATION
        if operations and operations[0].operation is OperationType.SUBSCRIPTION:
            return OperationKind.SUBSCRIPTION
        return OperationKind.QUERY

    def evaluate(self, query: str) -> GateDecision:
        """Run the gate on query text. Never raises."""
        try:
            document = parse(query)
        except GraphQLError as e:
            return GateDecision(
                state=GateState.BLOCKED,
                classification=OperationKind.INVALID,
                reason=BlockReason.INVALID_QUERY,
                message=f"Invalid GraphQL query: {e}",
            )

        classification = self.classify(document)

        if classification is OperationKind.MUTATION and not self._allow_mutations:
            return GateDecision(
                state=GateState.BLOCKED,
                classification=classification,
                reason=BlockReason.MUTATIONS_DISABLED,
                message=MUTATIONS_DISABLED_MESSAGE,
            )

        return GateDecision(state=GateState.ALLOWED, classification=classification)
