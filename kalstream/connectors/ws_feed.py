import asyncio, json, websockets

# Any websocket that pushes JSON objects carrying a numeric field
WS_URL = "ws://localhost:8765/observations"

def parse_message(raw, field: str = "value") -> float | None:
    """Pull one observation out of a feed message, None if there is none."""
    try:
        msg = json.loads(raw)
    except (json.JSONDecodeError, TypeError):
        return None
    if not isinstance(msg, dict):
        return None
    val = msg.get(field)
    if isinstance(val, bool) or not isinstance(val, (int, float)):
        return None
    return float(val)

async def stream(queue: asyncio.Queue, url: str = WS_URL, field: str = "value"):
    while True:
        try:
            async with websockets.connect(url, ping_interval=20, max_size=2**20) as ws:
                async for raw in ws:
                    val = parse_message(raw, field)
                    if val is not None:
                        await queue.put(val)
        except Exception as e:
            print(f"Feed error on {url}: {e}. Retrying...")
            await asyncio.sleep(1)
