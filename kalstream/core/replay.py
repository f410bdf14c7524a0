import numpy as np, pandas as pd
from sklearn.metrics import mean_squared_error
from kalstream.core.reader import load_jsonl
from kalstream.core.kalman import KalmanFilter
from kalstream.core.pipeline import Pipeline
from kalstream.core.transform import compose
from kalstream.core.init_config import FilterConfig
from kalstream.core.checkpoint import CheckpointStore

class Replayer:
    """
    Offline driver: pushes a recorded JSONL stream through a fresh Kalman
    pipeline, row by row, exactly as a live feed would.
    """
    def __init__(self, data_path: str, cfg: FilterConfig, transforms=(),
                 store: CheckpointStore | None = None, checkpoint_every: int = 0,
                 name: str = "replay"):
        self.df     = load_jsonl(data_path)
        self.cfg    = cfg
        self.transforms = tuple(transforms)
        self.prep   = compose(*self.transforms)
        self.store  = store
        self.checkpoint_every = checkpoint_every
        self.name   = name
        self.rows: list[dict] = []
        self.checkpoints = 0

    def run(self):
        self.rows = []
        self.checkpoints = 0
        if self.df.empty:
            return {"n": 0, "estimate": None, "estimate_uncertainty": None,
                    "innovation_mse": None, "checkpoints": 0}

        # start at the first observation, its innovation is then zero
        kf   = KalmanFilter.from_config(self.cfg, initial_estimate=self.prep(float(self.df["value"].iloc[0])))
        pipe = Pipeline(kf, self.transforms)

        for i, row in enumerate(self.df.itertuples(index=False), start=1):
            prior = kf.estimate
            est   = pipe.step(float(row.value))
            obs   = self.prep(float(row.value))
            self.rows.append({
                "t_ns": int(row.t_ns),
                "observation": obs,
                "prior": prior,
                "estimate": est,
                "estimate_uncertainty": kf.estimate_uncertainty,
            })
            if self.store is not None and self.checkpoint_every and i % self.checkpoint_every == 0:
                self.store.save(kf, self.name)
                self.checkpoints += 1

        obs   = np.array([r["observation"] for r in self.rows])
        prior = np.array([r["prior"] for r in self.rows])
        return {
            "n": len(self.rows),
            "estimate": kf.estimate,
            "estimate_uncertainty": kf.estimate_uncertainty,
            "innovation_mse": float(mean_squared_error(obs, prior)),
            "checkpoints": self.checkpoints,
        }

    def trace(self) -> pd.DataFrame:
        return pd.DataFrame(self.rows, columns=["t_ns", "observation", "prior",
                                                "estimate", "estimate_uncertainty"])
