from kalstream.core.reader import load_jsonl

def calc_stats(path: str):
    df = load_jsonl(path)
    if df.empty:
        raise ValueError(f"{path}: no observations")

    var_level = float(df["value"].var(ddof=0))
    diffs     = df["value"].diff().dropna()
    var_diff  = float(diffs.var(ddof=0)) if len(diffs) else 0.0

    return {"var_level": var_level, "var_diff": var_diff, "n": len(df)}
