from dataclasses import dataclass
from typing import Callable


@dataclass(frozen=True)
class StatelessTransform:
    """
    Pure scalar -> scalar mapping applied to an observation before it reaches
    a model. Holds nothing but the function, so one instance can be shared by
    any number of pipelines.
    """
    fn: Callable[[float], float]

    def apply(self, x: float) -> float:
        # NaN / inf are passed through, guarding them is the caller's job
        return self.fn(x)

    def __call__(self, x: float) -> float:
        return self.apply(x)


def compose(*transforms: StatelessTransform) -> StatelessTransform:
    """Chain transforms left to right: compose(a, b)(x) == b(a(x))."""
    stages = tuple(transforms)

    def _chain(x: float) -> float:
        for t in stages:
            x = t.apply(x)
        return x

    return StatelessTransform(_chain)


def scale(k: float) -> StatelessTransform:
    return StatelessTransform(lambda x: x * k)


def shift(c: float) -> StatelessTransform:
    return StatelessTransform(lambda x: x + c)


def clip(lo: float, hi: float) -> StatelessTransform:
    if lo > hi:
        raise ValueError(f"clip bounds out of order: {lo} > {hi}")
    return StatelessTransform(lambda x: min(max(x, lo), hi))
