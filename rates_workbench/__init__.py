"""Small rates workbench on top of QuantLib.

This package provides:
- Index inspection (static conventions of FedFunds / USD Libor indices)
- Hull-White calibration to a diagonal swaption basket, with optional fixed parameters
- Deposit/futures/swap discount-curve bootstrapping and zero-rate reports

Curve construction, pricing engines and the optimizer are QuantLib's; this
package only assembles market data and drives them.
"""

from .config import AppConfig
from .indices import IndexKind, RateIndexDescriptor, inspect_indices
from .market import MarketLoader, VolatilityQuote, diagonal_basket
from .calibration import (
    CalibrationResult,
    EndCriteriaSpec,
    ModelCalibrator,
    Termination,
    run_calibration_cases,
)
from .bootstrap import BootstrappedCurve, bootstrap_curve
