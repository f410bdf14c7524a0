from typing import Any, Callable, Protocol


class StateSpaceModel(Protocol):
    """
    Anything that keeps a belief across a stream of scalar observations.

    update:   fold one observation into the state and return the new estimate
    snapshot: immutable copy of the full internal state
    restore:  overwrite every internal attribute from a snapshot
    """
    def update(self, observation: float) -> float: ...

    def snapshot(self) -> Any: ...

    def restore(self, state: Any) -> None: ...


def as_update_fn(model: StateSpaceModel) -> Callable[[float], float]:
    """Bare callable for a reactive layer to wrap in its own map operator."""
    return model.update
