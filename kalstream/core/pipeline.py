from typing import Callable, Iterable, Iterator, Sequence

from kalstream.core.model import StateSpaceModel, as_update_fn
from kalstream.core.transform import StatelessTransform


class Pipeline:
    """
    Zero or more stateless transforms followed by exactly one model.
    Every value runs the whole chain before the next one is taken, nothing is
    buffered, reordered or dropped.
    """
    def __init__(self, model: StateSpaceModel, transforms: Sequence[StatelessTransform] = ()):
        self.model = model
        self.transforms: tuple[StatelessTransform, ...] = tuple(transforms)

    def step(self, value: float) -> float:
        for t in self.transforms:
            value = t.apply(value)
        return self.model.update(value)

    def run(self, values: Iterable[float]) -> Iterator[float]:
        """Lazily drives the pipeline, one estimate per input."""
        for v in values:
            yield self.step(v)

    @property
    def update_fn(self) -> Callable[[float], float]:
        if not self.transforms:
            return as_update_fn(self.model)
        return self.step

    def snapshot(self):
        return self.model.snapshot()

    def restore(self, state) -> None:
        self.model.restore(state)
