from kalstream.core.stats_extract import calc_stats
from kalstream.core.init_config import FilterConfig, build_cfg
from kalstream.core.replay import Replayer
from dataclasses import replace
import itertools
import pandas as pd
import matplotlib.pyplot as plt

TRAIN = "data/observations_train.jsonl"
TEST  = "data/observations_test.jsonl"

Q_MULTS = [0.1, 0.5, 1.0, 2.0, 10.0]
R_MULTS = [0.1, 0.5, 1.0, 2.0, 10.0]


def grid_search(path: str, q_mults=Q_MULTS, r_mults=R_MULTS):
    """
    Scales the calibrated process / measurement noise by every (q, r) pair and
    replays the file once per pair. Lowest one-step innovation MSE wins.

    Returns:
        (results DataFrame, best FilterConfig)
    """
    base = build_cfg(calc_stats(path))
    results = []
    best_mse, best_cfg = float("inf"), None
    for qm, rm in itertools.product(q_mults, r_mults):
        cfg = replace(base,
                      process_noise=base.process_noise * qm,
                      measurement_noise=base.measurement_noise * rm)
        res = Replayer(path, cfg).run()
        mse = res["innovation_mse"]
        results.append({
            "q_mult": qm,
            "r_mult": rm,
            "process_noise": cfg.process_noise,
            "measurement_noise": cfg.measurement_noise,
            "innovation_mse": mse,
        })
        if mse is not None and mse < best_mse:
            best_mse, best_cfg = mse, cfg
    return pd.DataFrame(results), best_cfg


def plot_grid(df: pd.DataFrame):
    pivot = df.pivot(index="q_mult", columns="r_mult", values="innovation_mse")
    plt.figure()
    plt.imshow(pivot, origin='lower', aspect='auto')
    plt.colorbar(label="innovation MSE")
    plt.xticks(range(len(pivot.columns)), pivot.columns)
    plt.yticks(range(len(pivot.index)), pivot.index)
    plt.xlabel("measurement noise multiplier")
    plt.ylabel("process noise multiplier")
    plt.title("One-step prediction error by noise setting")
    plt.tight_layout()
    plt.show()


def plot_trace(trace: pd.DataFrame):
    plt.figure(figsize=(12, 5))
    plt.plot(trace["t_ns"], trace["observation"], '.', alpha=0.4, label="observation")
    plt.plot(trace["t_ns"], trace["estimate"], label="estimate")
    plt.xlabel("t_ns")
    plt.legend()
    plt.grid(True)
    plt.tight_layout()
    plt.show()


def main():
    try:
        df, best_cfg = grid_search(TRAIN)
    except FileNotFoundError:
        print(f"Error: Data file not found. Please check your path: {TRAIN}")
        return
    except ValueError as e:
        print(f"ValueError: Your JSONL file might be empty or malformed. Error: {e}")
        return

    print(df.sort_values("innovation_mse").head())
    print("best config:", best_cfg)
    plot_grid(df)

    print("\n=== OUT-OF-SAMPLE TEST ===")
    rep = Replayer(TEST, best_cfg)
    print("test:", rep.run())
    plot_trace(rep.trace())


if __name__ == '__main__':
    main()
