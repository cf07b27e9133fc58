from dataclasses import dataclass, field
from enum import Enum

import numpy as np
import QuantLib as ql

from .market import MarketLoader, usd_libor_3m
from .utils import DateUtils, evaluation_date


@dataclass(frozen=True)
class EndCriteriaSpec:
    """Optimizer termination knobs (mirrors ``ql.EndCriteria``)."""

    max_iterations: int = 10000
    max_stationary_state_iterations: int = 100
    root_epsilon: float = 1.0e-6
    function_epsilon: float = 1.0e-8
    gradient_norm_epsilon: float = 1.0e-8

    def to_ql(self):
        return ql.EndCriteria(
            int(self.max_iterations),
            int(self.max_stationary_state_iterations),
            float(self.root_epsilon),
            float(self.function_epsilon),
            float(self.gradient_norm_epsilon),
        )


class Termination(Enum):
    """Why the optimizer stopped. Exactly one per calibration run.

    QuantLib's Levenberg-Marquardt never reports CONVERGED; a normal finish
    comes back as STATIONARY_FUNCTION_VALUE.
    """

    CONVERGED = "converged"
    MAX_ITERATIONS = "max iterations"
    STATIONARY_POINT = "stationary point"
    STATIONARY_FUNCTION_VALUE = "stationary function value"
    STATIONARY_GRADIENT = "stationary gradient"


# ql.EndCriteria.Type names; "None" is exposed as "None_" by recent bindings.
_TERMINATION_BY_NAME = {
    "None": Termination.CONVERGED,
    "None_": Termination.CONVERGED,
    "StationaryFunctionAccuracy": Termination.CONVERGED,
    "MaxIterations": Termination.MAX_ITERATIONS,
    "StationaryPoint": Termination.STATIONARY_POINT,
    "StationaryFunctionValue": Termination.STATIONARY_FUNCTION_VALUE,
    "FunctionEpsilonTooSmall": Termination.STATIONARY_FUNCTION_VALUE,
    "ZeroGradientNorm": Termination.STATIONARY_GRADIENT,
}


def termination_from_ql(ec_type):
    """Map a ``ql.EndCriteria.Type`` value onto :class:`Termination`.

    Types without a mapping (``Unknown``) count as running out of iterations:
    the optimizer stopped without reporting convergence.
    """
    for name, termination in _TERMINATION_BY_NAME.items():
        value = getattr(ql.EndCriteria, name, None)
        if value is not None and value == ec_type:
            return termination
    return Termination.MAX_ITERATIONS


# ---------------------------------------------------------------------------
# Calibration instruments: a closed set of tagged variants
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class SwaptionInstrument:
    expiry_years: int
    tenor_years: int
    volatility: float
    kind: str = field(default="swaption", init=False)

    @classmethod
    def from_quote(cls, quote):
        return cls(quote.expiry_years, quote.tenor_years, quote.volatility)


@dataclass(frozen=True)
class CapInstrument:
    tenor_years: int
    volatility: float
    kind: str = field(default="cap", init=False)


def _swaption_helper(instrument, curve, index, day_counter):
    return ql.SwaptionHelper(
        DateUtils.years(instrument.expiry_years),
        DateUtils.years(instrument.tenor_years),
        ql.QuoteHandle(ql.SimpleQuote(float(instrument.volatility))),
        index,
        ql.Period(1, ql.Years),
        day_counter,
        day_counter,
        curve,
    )


def _cap_helper(instrument, curve, index, day_counter):
    return ql.CapHelper(
        DateUtils.years(instrument.tenor_years),
        ql.QuoteHandle(ql.SimpleQuote(float(instrument.volatility))),
        index,
        ql.Annual,
        day_counter,
        False,
        curve,
    )


_HELPER_BUILDERS = {
    "swaption": _swaption_helper,
    "cap": _cap_helper,
}


def build_helper(instrument, curve, index, day_counter=None):
    """Turn a calibration instrument into a QuantLib calibration helper."""
    try:
        builder = _HELPER_BUILDERS[instrument.kind]
    except (AttributeError, KeyError):
        raise ValueError(f"Unsupported calibration instrument: {instrument!r}") from None
    return builder(instrument, curve, index, day_counter or ql.Actual360())


# ---------------------------------------------------------------------------
# Models and engines
# ---------------------------------------------------------------------------
def hull_white_model(curve, reversion=None, sigma=None):
    """Hull-White 1F model fitted to ``curve``.

    Omitted parameters take QuantLib's defaults (a=0.1, sigma=0.01).
    """
    if reversion is None and sigma is None:
        return ql.HullWhite(curve)
    a = 0.1 if reversion is None else float(reversion)
    s = 0.01 if sigma is None else float(sigma)
    return ql.HullWhite(curve, a, s)


def jamshidian_engine(model):
    return ql.JamshidianSwaptionEngine(model)


@dataclass
class CalibrationResult:
    """Outcome of one calibration run.

    A run that stops on an iteration or stagnation limit is still a result;
    check ``termination`` and ``residual_norm`` to judge the fit. QuantLib's
    Levenberg-Marquardt reports a normal MINPACK finish as a stationary
    function value.
    """

    params: list
    fixed: list
    termination: Termination
    residual_norm: float
    errors: list = field(default_factory=list)


class ModelCalibrator:
    """Fit a calibrated model's parameters to a basket of helpers.

    Helpers are kept in insertion order. The pricing engine is attached at
    calibration time, so the same basket can be reused for several models.
    """

    def __init__(self, end_criteria, val_date):
        self.end_criteria = end_criteria
        self.val_date = DateUtils.to_ql_date(val_date)
        self.helpers = []

    def add_calibration_helper(self, helper):
        self.helpers.append(helper)

    def add_instrument(self, instrument, curve, index, day_counter=None):
        helper = build_helper(instrument, curve, index, day_counter)
        self.add_calibration_helper(helper)
        return helper

    def calibrate(self, model, engine, curve, fix_parameters=()):
        """Run Levenberg-Marquardt on ``model`` against every helper.

        Parameters
        ----------
        model : QuantLib calibrated model (e.g. ``ql.HullWhite``)
            Updated in place.
        engine : QuantLib pricing engine built on ``model``
            Assigned to every helper, replacing any previous engine.
        curve : YieldTermStructureHandle
            The curve the helpers and the model were built on.
        fix_parameters : sequence of bool
            Empty means calibrate everything; otherwise one flag per model
            parameter, True to hold that parameter at its current value.
        """
        if model is None or engine is None:
            raise ValueError("Calibration needs both a model and a pricing engine")
        if curve is None or not curve:
            raise ValueError("Calibration needs a linked yield curve handle")

        fix_parameters = [bool(f) for f in fix_parameters]
        n_params = len(list(model.params()))
        if fix_parameters and len(fix_parameters) != n_params:
            raise ValueError(
                f"Expected {n_params} fix flags (one per model parameter), "
                f"got {len(fix_parameters)}"
            )

        with evaluation_date(self.val_date):
            for helper in self.helpers:
                helper.setPricingEngine(engine)

            method = ql.LevenbergMarquardt()
            criteria = self.end_criteria.to_ql()
            if not fix_parameters:
                model.calibrate(self.helpers, method, criteria)
            else:
                weights = []
                model.calibrate(
                    self.helpers, method, criteria, ql.NoConstraint(), weights, fix_parameters
                )

            errors = [float(h.calibrationError()) for h in self.helpers]
            termination = termination_from_ql(model.endCriteria())

        return CalibrationResult(
            params=[float(p) for p in model.params()],
            fixed=fix_parameters,
            termination=termination,
            residual_norm=float(np.linalg.norm(errors)) if errors else 0.0,
            errors=errors,
        )


@dataclass(frozen=True)
class CalibrationCase:
    """One demonstration run: starting point plus which parameters are held."""

    label: str
    reversion: float = None
    sigma: float = None
    fix_parameters: tuple = ()


CALIBRATION_CASES = (
    CalibrationCase("case 1 : calibrate all involved parameters (HW1F : reversion, sigma)"),
    CalibrationCase("case 2 : calibrate sigma and fix reversion to 0.05", 0.05, 0.0001, (True, False)),
    CalibrationCase("case 3 : calibrate reversion and fix sigma to 0.01", 0.05, 0.01, (False, True)),
)


def build_calibrator(cfg, curve):
    """Calibrator loaded with the diagonal swaption basket from ``cfg``."""
    calibrator = ModelCalibrator(cfg.end_criteria, cfg.trade_date)
    index = usd_libor_3m(curve)
    for quote in MarketLoader(cfg).basket():
        calibrator.add_instrument(SwaptionInstrument.from_quote(quote), curve, index, cfg.helper_day_counter)
    return calibrator


def run_calibration_cases(cfg, cases=CALIBRATION_CASES):
    """Calibrate a fresh Hull-White model per case on a shared basket.

    Returns a list of ``(case, CalibrationResult)`` in case order.
    """
    curve = MarketLoader(cfg).curve()
    calibrator = build_calibrator(cfg, curve)

    out = []
    for case in cases:
        model = hull_white_model(curve, case.reversion, case.sigma)
        engine = jamshidian_engine(model)
        result = calibrator.calibrate(model, engine, curve, case.fix_parameters)
        out.append((case, result))
    return out
