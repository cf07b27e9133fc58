from dataclasses import dataclass

import QuantLib as ql

from .indices import IndexKind, build_index


SWAPTION_VOLATILITIES = (0.1148, 0.1108, 0.1070, 0.1021, 0.1000)


@dataclass(frozen=True)
class VolatilityQuote:
    """Swaption vol for an (expiry, underlying swap tenor) pair, in years."""

    expiry_years: int
    tenor_years: int
    volatility: float


def swaption_volatility_list():
    """Hard-coded annual swaption vols (1Y expiry first)."""
    return list(SWAPTION_VOLATILITIES)


def diagonal_basket(vols):
    """Build the diagonal basket: expiry + tenor is constant (N + 1 years).

    The i-th vol gets expiry ``i + 1`` and tenor ``N - i``.
    """
    n = len(vols)
    return [VolatilityQuote(i + 1, n - i, float(v)) for i, v in enumerate(vols)]


def flat_curve(settlement_date, rate, day_counter):
    """A flat-forward discount curve wrapped in a handle.

    The handle is shared by every helper and by the floating-rate index so
    they all see one curve object.
    """
    curve = ql.FlatForward(settlement_date, float(rate), day_counter)
    return ql.YieldTermStructureHandle(curve)


def usd_libor_3m(curve_handle):
    """3M USD Libor projecting off ``curve_handle``."""
    return build_index(IndexKind.USD_LIBOR_3M, curve_handle)


class MarketLoader:
    """Assemble the calibration market (curve, index, vol basket) from config."""

    def __init__(self, cfg):
        self.cfg = cfg

    def curve(self):
        return flat_curve(self.cfg.settlement_date, self.cfg.flat_rate, self.cfg.curve_day_counter)

    def basket(self):
        return diagonal_basket(self.cfg.swaption_vols)
