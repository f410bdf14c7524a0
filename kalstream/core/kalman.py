from dataclasses import dataclass

# Defaults used by KalmanFilter.new(). Fixed so runs are reproducible.
DEFAULT_ESTIMATE_UNCERTAINTY = 1.0
DEFAULT_PROCESS_NOISE = 1.0
DEFAULT_MEASUREMENT_NOISE = 1.0


def _check_non_negative(**variances) -> None:
    for name, val in variances.items():
        if val < 0:
            raise ValueError(f"{name} must be >= 0, got {val}")


@dataclass(frozen=True)
class KalmanState:
    """Everything needed to rebuild a KalmanFilter exactly."""
    estimate: float
    estimate_uncertainty: float
    process_noise: float
    measurement_noise: float


class KalmanFilter:
    """
    A 1-dimensional Kalman filter over a random-walk state.
    Each observation is a noisy reading of a single hidden value.
    """
    def __init__(self,
                 initial_estimate: float,
                 estimate_uncertainty: float = DEFAULT_ESTIMATE_UNCERTAINTY,
                 process_noise: float = DEFAULT_PROCESS_NOISE,
                 measurement_noise: float = DEFAULT_MEASUREMENT_NOISE):
        """
        Args:
            initial_estimate: Starting guess for the hidden value.
            estimate_uncertainty: Variance of that guess (P).
            process_noise: Variance of the random walk per step (Q). A higher
                           q means the filter adapts to new observations faster.
            measurement_noise: Variance of the observation error (R).
        """
        _check_non_negative(estimate_uncertainty=estimate_uncertainty,
                            process_noise=process_noise,
                            measurement_noise=measurement_noise)
        self._v = float(initial_estimate)
        self._P = float(estimate_uncertainty)
        self._q = float(process_noise)
        self._r = float(measurement_noise)

    @classmethod
    def new(cls, initial_estimate: float) -> "KalmanFilter":
        return cls(initial_estimate)

    @classmethod
    def from_config(cls, cfg, initial_estimate: float = 0.0) -> "KalmanFilter":
        return cls(initial_estimate,
                   estimate_uncertainty=cfg.estimate_uncertainty,
                   process_noise=cfg.process_noise,
                   measurement_noise=cfg.measurement_noise)

    @property
    def estimate(self) -> float:
        return self._v

    @property
    def estimate_uncertainty(self) -> float:
        return self._P

    @property
    def process_noise(self) -> float:
        return self._q

    @property
    def measurement_noise(self) -> float:
        return self._r

    def update(self, observation: float) -> float:
        """
        Performs one predict-correct cycle.

        Args:
            observation: New reading of the hidden value. NaN or inf is
                         accepted and will propagate into the estimate.

        Returns:
            The corrected estimate.
        """
        # predict -> the state is a random walk, so the best guess stays put
        # and only the uncertainty grows
        P_hat = self._P + self._q

        if P_hat == 0 and self._r == 0:
            # 0/0 gain: nothing to correct, keep the prior
            self._P = 0.0
            return self._v

        # K decides how much we trust the observation vs the prediction.
        # R == 0 gives K == 1, the observation is taken as is
        K = P_hat / (P_hat + self._r)
        self._v = self._v + K * (observation - self._v)
        self._P = (1 - K) * P_hat
        return self._v

    def snapshot(self) -> KalmanState:
        return KalmanState(estimate=self._v,
                           estimate_uncertainty=self._P,
                           process_noise=self._q,
                           measurement_noise=self._r)

    def restore(self, state: KalmanState) -> None:
        if not isinstance(state, KalmanState):
            raise TypeError(f"expected KalmanState, got {type(state).__name__}")
        # validate everything before touching any field
        _check_non_negative(estimate_uncertainty=state.estimate_uncertainty,
                            process_noise=state.process_noise,
                            measurement_noise=state.measurement_noise)
        self._v, self._P, self._q, self._r = (state.estimate,
                                              state.estimate_uncertainty,
                                              state.process_noise,
                                              state.measurement_noise)

    def __repr__(self) -> str:
        return (f"KalmanFilter(estimate={self._v!r}, P={self._P!r}, "
                f"q={self._q!r}, r={self._r!r})")
