import asyncio
import json
from kalstream.connectors import ws_feed
from kalstream.core.checkpoint import CheckpointStore
from kalstream.core.kalman import KalmanFilter
from kalstream.core.pipeline import Pipeline
from kalstream.core.recorder import Recorder

STREAM_NAME      = "observations"
CHECKPOINT_EVERY = 100   # updates between checkpoints, 0 disables

async def consumer(q: asyncio.Queue, pipeline: Pipeline, recorder: Recorder,
                   store: CheckpointStore | None = None, name: str = STREAM_NAME,
                   checkpoint_every: int = CHECKPOINT_EVERY) -> int:
    """
    Drains the queue until a None sentinel. Each value goes through the whole
    pipeline before the next one is awaited. Returns the number processed.
    """
    n = 0
    while True:
        val = await q.get()
        if val is None:
            break
        est = pipeline.step(val)
        n += 1
        recorder.log_estimate(name, val, pipeline.snapshot())
        print(json.dumps({"n": n, "observation": val, "estimate": est}))
        if store is not None and checkpoint_every and n % checkpoint_every == 0:
            store.save(pipeline.model, name)
    if store is not None:
        store.save(pipeline.model, name)
    return n

async def main():
    q = asyncio.Queue()
    recorder = Recorder()
    store = CheckpointStore()
    pipe = Pipeline(KalmanFilter.new(0.0))
    store.restore_latest(pipe.model, STREAM_NAME)

    tasks = [consumer(q, pipe, recorder, store), ws_feed.stream(q)]
    try:
        await asyncio.gather(*tasks)
    finally:
        recorder.close()

if __name__ == "__main__":
    asyncio.run(main())
