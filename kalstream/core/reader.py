import pandas as pd, json, pathlib

def load_jsonl(path: str) -> pd.DataFrame:
    """
    Return DataFrame with int t_ns and float value, sorted by time.
    A file with no t_ns at all keeps file order; a file with only some
    rows timed is rejected.
    """
    rows = []
    with pathlib.Path(path).open() as fh:
        for line in fh:
            if line.strip():
                rows.append(json.loads(line))
    df = pd.DataFrame(rows, columns=["t_ns", "value"])
    if df["value"].isna().any():
        raise ValueError(f"{path}: every row needs a 'value'")
    missing_t = df["t_ns"].isna()
    if missing_t.all():
        df["t_ns"] = range(len(df))
    elif missing_t.any():
        raise ValueError(f"{path}: rows {list(df.index[missing_t])} have no 't_ns'")
    df["t_ns"]  = df["t_ns"].astype("int64")
    df["value"] = df["value"].astype(float)
    return df.sort_values("t_ns", kind="stable").reset_index(drop=True)
