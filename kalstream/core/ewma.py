import math
from dataclasses import dataclass


@dataclass(frozen=True)
class EWMAState:
    value: float
    alpha: float
    warmed_up: bool


class ExponentialSmoothing:
    """
    Exponentially Weighted Moving Average over a stream of observations.
    Same update/snapshot/restore surface as KalmanFilter, so pipelines can
    swap one for the other.
    """
    def __init__(self, halflife: float, initial_value: float = 0.0):
        """
        Args:
            halflife: The half-life of the average, in observations. A very
                      large half-life gives alpha == 0, the first observation
                      is then held forever.
            initial_value: The value reported before any observation arrives.
        """
        # alpha is our decay factor, calculated from the half-life
        self._alpha = 1.0 - math.exp(math.log(0.5) / (halflife if halflife > 0 else 1.0))
        self._value = float(initial_value)
        self._warmed_up = False

    @property
    def alpha(self) -> float:
        return self._alpha

    @property
    def value(self) -> float:
        return self._value

    @property
    def is_warmed_up(self) -> bool:
        return self._warmed_up

    def update(self, observation: float) -> float:
        """Folds a new observation into the average."""
        if not self._warmed_up:
            self._value = observation
            self._warmed_up = True
        else:
            self._value = self._alpha * observation + (1.0 - self._alpha) * self._value
        return self._value

    def snapshot(self) -> EWMAState:
        return EWMAState(value=self._value, alpha=self._alpha, warmed_up=self._warmed_up)

    def restore(self, state: EWMAState) -> None:
        if not isinstance(state, EWMAState):
            raise TypeError(f"expected EWMAState, got {type(state).__name__}")
        if not 0.0 <= state.alpha <= 1.0:
            raise ValueError(f"alpha must be in [0, 1], got {state.alpha}")
        self._value, self._alpha, self._warmed_up = state.value, state.alpha, state.warmed_up
