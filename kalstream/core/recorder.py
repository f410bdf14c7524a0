import json
import time
import pathlib
from typing import TextIO

from kalstream.core.serialization import snapshot_to_dict

class Recorder:
    """
    Event log for a running stream: one <event>_<YYYYMMDD>.jsonl file per
    event type and day, one compact JSON object per line.
    """
    def __init__(self, log_directory: str = "logs"):
        self.logdir = pathlib.Path(log_directory)
        self.logdir.mkdir(parents=True, exist_ok=True)
        self._files: dict[str, TextIO] = {}
        print(f"Recorder initialized. Logging to directory: {self.logdir.resolve()}")

    def _handle(self, event_name: str) -> TextIO:
        key = f"{event_name}_{time.strftime('%Y%m%d')}"
        if key not in self._files:
            # line buffered
            self._files[key] = (self.logdir / f"{key}.jsonl").open("a", buffering=1)
        return self._files[key]

    def log(self, event_name: str, data: dict, state=None):
        """
        Args:
            event_name: File prefix, e.g. 'observations' or 'estimates'.
            data: Fields to write.
            state: Optional model snapshot, flattened into the entry with
                   its 'model' tag so the line can be fed back to deserialize.
        """
        entry = {"t_log_ns": time.time_ns(), **data}
        if state is not None:
            entry.update(snapshot_to_dict(state))
        self._handle(event_name).write(json.dumps(entry, separators=(",",":")) + "\n")

    def log_estimate(self, stream: str, observation: float, state) -> None:
        self.log("estimates", {"stream": stream, "observation": observation}, state=state)

    def close(self):
        for fh in self._files.values():
            fh.close()
        self._files = {}

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
