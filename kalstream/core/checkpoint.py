import time
import pathlib

from kalstream.core.serialization import serialize, deserialize


class CheckpointStore:
    """
    Keeps serialized model snapshots as <name>_<t_ns>.json files in one
    directory. Newest file per name wins on restore.
    """
    def __init__(self, directory: str = "checkpoints"):
        self.dir = pathlib.Path(directory)
        self.dir.mkdir(parents=True, exist_ok=True)

    def save(self, model, name: str) -> pathlib.Path:
        path = self.dir / f"{name}_{time.time_ns()}.json"
        # files matching <name>_*.json are always complete
        tmp = path.with_suffix(".tmp")
        tmp.write_text(serialize(model.snapshot()))
        tmp.replace(path)
        return path

    def latest(self, name: str) -> pathlib.Path | None:
        found = []
        for p in self.dir.glob(f"{name}_*.json"):
            stamp = p.stem[len(name) + 1:]
            if stamp.isdigit():
                found.append((int(stamp), p))
        return max(found)[1] if found else None

    def load(self, path):
        return deserialize(pathlib.Path(path).read_text())

    def restore_latest(self, model, name: str) -> bool:
        """Restores model from the newest checkpoint, False if there is none."""
        path = self.latest(name)
        if path is None:
            return False
        model.restore(self.load(path))
        print(f"Restored {name} from {path}")
        return True
