from dataclasses import dataclass

from kalstream.core.kalman import (DEFAULT_ESTIMATE_UNCERTAINTY,
                                   DEFAULT_MEASUREMENT_NOISE,
                                   DEFAULT_PROCESS_NOISE)


@dataclass
class FilterConfig:
    estimate_uncertainty: float = DEFAULT_ESTIMATE_UNCERTAINTY
    process_noise: float = DEFAULT_PROCESS_NOISE
    measurement_noise: float = DEFAULT_MEASUREMENT_NOISE
    halflife: float = 60.0


def build_cfg(stats: dict) -> FilterConfig:
    # local level model: var(diff) = Q + 2R, split 10% / 90%
    var_diff = stats["var_diff"]
    return FilterConfig(
        estimate_uncertainty = stats["var_level"],
        process_noise        = var_diff * 0.10,
        measurement_noise    = var_diff * 0.45,
        halflife             = 60.0,
    )
