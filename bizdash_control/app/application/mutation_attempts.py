from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class MutationState:
    mutation_in_flight: set[str] = field(default_factory=set)


def begin_mutation(state: MutationState, operation: str) -> bool:
    if operation in state.mutation_in_flight:
        return False
    state.mutation_in_flight.add(operation)
    return True


def end_mutation(state: MutationState, operation: str) -> None:
    state.mutation_in_flight.discard(operation)
