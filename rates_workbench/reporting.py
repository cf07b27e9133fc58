import json
from dataclasses import asdict
from pathlib import Path

import QuantLib as ql


def ensure_dir(path):
    p = Path(path)
    p.mkdir(parents=True, exist_ok=True)
    return p


def save_calibration_params(results, output_dir):
    """Save calibrated parameters and fit diagnostics as JSON.

    ``results`` is the list of ``(case, CalibrationResult)`` pairs returned
    by ``run_calibration_cases``.
    """
    out = ensure_dir(output_dir)
    path = out / "calibration_params.json"
    payload = []
    for case, res in results:
        payload.append(
            {
                "case": case.label,
                "reversion": res.params[0],
                "sigma": res.params[1],
                "fixed": list(res.fixed),
                "termination": res.termination.value,
                "residual_norm": res.residual_norm,
            }
        )
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, default=float)
    return path


def save_zero_rates(report, output_dir, filename="zero_rates.txt"):
    """Write a zero-rate report as flat ``date: rate`` lines."""
    out = ensure_dir(output_dir)
    path = out / filename
    with open(path, "w", encoding="utf-8") as f:
        for _, row in report.iterrows():
            f.write(f" {row['date']}: {row['zero_rate']}\n")
    return path


def save_config_snapshot(cfg, output_dir):
    """Persist a subset of config fields as JSON (reproducibility)."""
    out = ensure_dir(output_dir)
    path = out / "config_snapshot.json"
    d = {}
    for k, v in cfg.__dict__.items():
        if isinstance(v, ql.Date):
            d[k] = str(v)
        elif k == "end_criteria":
            d[k] = asdict(v)
        elif isinstance(v, (int, float, str, bool)):
            d[k] = v
    with open(path, "w", encoding="utf-8") as f:
        json.dump(d, f, indent=2, sort_keys=True)
    return path


def maybe_plot_zero_curve(report, output_dir):
    """Plot the zero-rate report.

    If matplotlib is not available, this function does nothing.
    """
    try:
        import matplotlib.pyplot as plt
    except ImportError:
        return None

    fig = plt.figure()
    ax = fig.add_subplot(111)
    ax.plot(report["date"], report["zero_rate"], marker="o")
    ax.set_xlabel("Date")
    ax.set_ylabel("Zero rate")
    ax.grid(True, alpha=0.3)
    fig.autofmt_xdate()
    fig.tight_layout()

    out = ensure_dir(Path(output_dir) / "figures")
    p = out / "zero_curve.png"
    fig.savefig(p, dpi=200)
    plt.close(fig)
    return p
