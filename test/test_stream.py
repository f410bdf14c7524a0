import asyncio
from kalstream.connectors.ws_feed import parse_message
from kalstream.core.checkpoint import CheckpointStore
from kalstream.core.kalman import KalmanFilter
from kalstream.core.pipeline import Pipeline
from kalstream.core.recorder import Recorder
from kalstream.core.transform import scale
from kalstream.run_stream import consumer

def test_parse_message():
    assert parse_message('{"value": 1.5}') == 1.5
    assert parse_message('{"value": 2}') == 2.0
    assert parse_message('{"price": 3.0}', field="price") == 3.0
    assert parse_message('{"value": "1.5"}') is None
    assert parse_message('{"value": true}') is None
    assert parse_message('[1.0]') is None
    assert parse_message('garbage') is None

def test_consumer_processes_in_order_and_checkpoints(tmp_path):
    values = [1.0, 2.0, 3.0]
    recorder = Recorder(str(tmp_path / "logs"))
    store = CheckpointStore(str(tmp_path / "ckpt"))
    pipe = Pipeline(KalmanFilter.new(0.0), [scale(1.0)])

    async def drive():
        q = asyncio.Queue()
        for v in values + [None]:
            q.put_nowait(v)
        return await consumer(q, pipe, recorder, store, name="s", checkpoint_every=2)

    n = asyncio.run(drive())
    recorder.close()

    ref = KalmanFilter.new(0.0)
    for v in values:
        ref.update(v)
    assert n == 3
    assert pipe.snapshot() == ref.snapshot()
    assert store.load(store.latest("s")) == ref.snapshot()

    lines = next((tmp_path / "logs").glob("estimates_*.jsonl")).read_text().splitlines()
    assert len(lines) == 3
