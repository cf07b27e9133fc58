import QuantLib as ql

from rates_workbench.bootstrap import SNAPSHOT_2015, bootstrap_curve, zero_rate_report
from rates_workbench.config import AppConfig
from rates_workbench.reporting import maybe_plot_zero_curve, save_zero_rates


def main():
    # -------------------------------------------------------------------------
    # 0. Inputs
    # -------------------------------------------------------------------------
    cfg = AppConfig()
    cfg.apply_global_settings()

    # -------------------------------------------------------------------------
    # 1. Bootstrap deposits + futures + swaps
    # -------------------------------------------------------------------------
    curve = bootstrap_curve(
        SNAPSHOT_2015,
        settlement_date=cfg.bootstrap_settlement_date,
        fixing_days=cfg.bootstrap_fixing_days,
    )

    # -------------------------------------------------------------------------
    # 2. Zero rates at the reporting dates (labels are reference quotes)
    # -------------------------------------------------------------------------
    report = zero_rate_report(curve)
    for _, row in report.iterrows():
        print(f"{row['label']}: {row['zero_rate'] * 100.0:.5f}")

    last, before_last = ql.Date(18, 2, 2020), ql.Date(19, 2, 2019)
    print(f" discount Rate : {curve.discount(last)}")
    print(f" Forward Rate : {curve.forward_rate(before_last, last, ql.Actual360(), ql.Simple)}")

    # -------------------------------------------------------------------------
    # 3. Outputs
    # -------------------------------------------------------------------------
    if cfg.output_dir:
        save_zero_rates(report, cfg.output_dir)
        maybe_plot_zero_curve(report, cfg.output_dir)

    return report


if __name__ == "__main__":
    main()
