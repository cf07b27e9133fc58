import warnings

import QuantLib as ql

from .calibration import EndCriteriaSpec
from .market import SWAPTION_VOLATILITIES


class AppConfig:
    """Central configuration object.

    Every input of the demonstration flows lives here: dates, market data,
    optimizer settings and output switches. Nothing is read from files or
    the environment.

    Parameters
    ----------
    trade_date : QuantLib.Date
        Evaluation date for the calibration flow.
    settlement_date : QuantLib.Date
        Reference date of the flat discount curve.

    Notes
    -----
    Dates are passed explicitly to the code that needs them; QuantLib's
    global evaluation date is only set temporarily, inside those calls.
    """

    def __init__(self, trade_date=None, settlement_date=None):
        self.trade_date = trade_date or ql.Date(15, 2, 2002)
        self.settlement_date = settlement_date or ql.Date(19, 2, 2002)

        # ----------------
        # Calibration market
        # ----------------
        self.flat_rate = 0.04875825
        self.curve_day_counter = ql.Actual365Fixed()
        self.helper_day_counter = ql.Actual360()
        self.swaption_vols = list(SWAPTION_VOLATILITIES)

        # ----------------
        # Optimizer
        # ----------------
        self.end_criteria = EndCriteriaSpec(10000, 100, 1.0e-6, 1.0e-8, 1.0e-8)

        # ----------------
        # Bootstrapping
        # ----------------
        self.bootstrap_settlement_date = ql.Date(18, 2, 2015)
        self.bootstrap_fixing_days = 2

        # ----------------
        # Output
        # ----------------
        self.rounding_digits = 5
        self.print_index_table = False
        self.output_dir = None  # reports are only written when set

        # ----------------
        # Global flags
        # ----------------
        self.suppress_warnings = True

    def apply_global_settings(self):
        """Apply process-wide settings (warning filters)."""
        if self.suppress_warnings:
            warnings.filterwarnings("ignore", category=DeprecationWarning)
