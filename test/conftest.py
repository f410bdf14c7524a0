import json
import pytest

@pytest.fixture
def write_obs(tmp_path):
    """Writes values as an observation JSONL file and returns its path."""
    def _write(values, name="obs.jsonl", start_ns=1_000):
        path = tmp_path / name
        with path.open("w") as fh:
            for i, v in enumerate(values):
                fh.write(json.dumps({"t_ns": start_ns + i * 1_000_000, "value": v}) + "\n")
        return str(path)
    return _write

@pytest.fixture
def noisy_level():
    # level 10 with a deterministic +-0.5 wobble and a step to 12 half way
    return [(10.0 if i < 20 else 12.0) + (0.5 if i % 2 else -0.5) for i in range(40)]
