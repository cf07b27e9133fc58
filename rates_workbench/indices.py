"""Read the static conventions of a few USD interest-rate indices.

Nothing is computed here. Each index is built by QuantLib and its conventions
(fixing lag, calendar, roll convention, end-of-month flag, day count,
currency) are copied into an immutable record.
"""

from dataclasses import dataclass, asdict
from enum import Enum

import QuantLib as ql
import pandas as pd

from .utils import business_day_convention_name


class IndexKind(Enum):
    FED_FUNDS = "FedFunds"  # overnight benchmark
    USD_LIBOR_ON = "USDLiborON"  # secondary overnight benchmark
    USD_LIBOR_3M = "USDLibor3M"  # term benchmark


DEFAULT_INDEX_KINDS = (IndexKind.FED_FUNDS, IndexKind.USD_LIBOR_ON, IndexKind.USD_LIBOR_3M)


@dataclass(frozen=True)
class RateIndexDescriptor:
    """Conventions of one rate index, detached from the QuantLib object."""

    name: str
    fixing_days: int
    fixing_calendar: str
    business_day_convention: str
    end_of_month: bool
    day_counter: str
    currency: str


def _usd_libor_on(handle):
    # Some builds only ship the generic daily-tenor class (USDLiborON is its
    # zero-settlement-day instance).
    if hasattr(ql, "USDLiborON"):
        return ql.USDLiborON(handle)
    return ql.DailyTenorUSDLibor(0, handle)


_INDEX_REGISTRY = {
    IndexKind.FED_FUNDS: lambda handle: ql.FedFunds(handle),
    IndexKind.USD_LIBOR_ON: _usd_libor_on,
    IndexKind.USD_LIBOR_3M: lambda handle: ql.USDLibor(ql.Period(3, ql.Months), handle),
}


def build_index(kind, curve_handle=None):
    """Create the QuantLib index for ``kind``.

    ``curve_handle`` is the forwarding curve; an empty handle is used when it
    is omitted, which is enough to read conventions.
    """
    if not isinstance(kind, IndexKind):
        try:
            kind = IndexKind(kind)
        except ValueError:
            raise ValueError(
                f"Unknown index kind: {kind}. "
                f"Available: {[k.value for k in IndexKind]}"
            ) from None
    handle = curve_handle if curve_handle is not None else ql.YieldTermStructureHandle()
    return _INDEX_REGISTRY[kind](handle)


def describe_index(index):
    """Copy the static conventions of a QuantLib IborIndex into a descriptor."""
    return RateIndexDescriptor(
        name=index.name(),
        fixing_days=int(index.fixingDays()),
        fixing_calendar=index.fixingCalendar().name(),
        business_day_convention=business_day_convention_name(index.businessDayConvention()),
        end_of_month=bool(index.endOfMonth()),
        day_counter=index.dayCounter().name(),
        currency=index.currency().code(),
    )


def inspect_indices(kinds=DEFAULT_INDEX_KINDS):
    """Build each index kind in order and return its descriptor."""
    return [describe_index(build_index(kind)) for kind in kinds]


def descriptors_frame(descriptors):
    """Tabulate descriptors (one row per index) for console display."""
    return pd.DataFrame([asdict(d) for d in descriptors])
