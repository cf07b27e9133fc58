from rates_workbench.calibration import run_calibration_cases
from rates_workbench.config import AppConfig
from rates_workbench.reporting import save_calibration_params
from rates_workbench.utils import round_half_away


PARAM_NAMES = ("reversion", "sigma")


def main():
    # -------------------------------------------------------------------------
    # 0. Inputs (trade date 15 Feb 2002, flat curve, diagonal swaption vols)
    # -------------------------------------------------------------------------
    cfg = AppConfig()
    cfg.apply_global_settings()

    # -------------------------------------------------------------------------
    # 1. Calibrate Hull-White for each case
    # -------------------------------------------------------------------------
    results = run_calibration_cases(cfg)

    for case, res in results:
        print(case.label)
        fixed = res.fixed or [False] * len(res.params)
        for name, value, is_fixed in zip(PARAM_NAMES, res.params, fixed):
            prefix = "fixed" if is_fixed else "calibrated"
            print(f"{prefix} {name}: {round_half_away(value, cfg.rounding_digits)}")
        print()

    # -------------------------------------------------------------------------
    # 2. Outputs (only when an output directory is configured)
    # -------------------------------------------------------------------------
    if cfg.output_dir:
        save_calibration_params(results, cfg.output_dir)

    return results


if __name__ == "__main__":
    main()
