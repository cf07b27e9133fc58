import math
from contextlib import contextmanager

import QuantLib as ql
import pandas as pd


def us_settlement_calendar():
    """Return the United States Settlement calendar with a generic fallback.

    Older QuantLib builds expose ``UnitedStates()`` without a market argument.
    """

    if hasattr(ql.UnitedStates, "Settlement"):
        return ql.UnitedStates(getattr(ql.UnitedStates, "Settlement"))
    return ql.UnitedStates()


def uk_exchange_calendar():
    """Return the London Stock Exchange calendar (fallback: generic UK)."""

    if hasattr(ql.UnitedKingdom, "Exchange"):
        return ql.UnitedKingdom(getattr(ql.UnitedKingdom, "Exchange"))
    return ql.UnitedKingdom()


def london_new_york_calendar():
    """Joint London/New York calendar used for USD Libor-style curves."""
    return ql.JointCalendar(uk_exchange_calendar(), us_settlement_calendar(), ql.JoinHolidays)


_CONVENTION_NAMES = (
    "Following",
    "ModifiedFollowing",
    "Preceding",
    "ModifiedPreceding",
    "Unadjusted",
    "HalfMonthModifiedFollowing",
    "Nearest",
)


def business_day_convention_name(convention):
    """Map a QuantLib BusinessDayConvention (an int enum) to its name."""
    for name in _CONVENTION_NAMES:
        if hasattr(ql, name) and getattr(ql, name) == convention:
            return name
    return str(convention)


def round_half_away(value, places):
    """Round ``value`` to ``places`` decimals, ties away from zero.

    Python's ``round`` rounds ties to even (``round(2.5) == 2``).
    """
    multiplier = 10.0 ** places
    scaled = float(value) * multiplier
    if scaled < 0:
        return math.ceil(scaled - 0.5) / multiplier
    return math.floor(scaled + 0.5) / multiplier


@contextmanager
def evaluation_date(date):
    """Temporarily set QuantLib's evaluation date.

    QuantLib keeps the evaluation date in a process-wide singleton. Every
    date-sensitive operation in this package takes its date explicitly and
    enters this context, so the previous value is always restored.

    An evaluation date equal to the system date is treated as unset: on exit
    QuantLib goes back to tracking today instead of pinning it.
    """
    settings = ql.Settings.instance()
    previous = settings.evaluationDate
    tracking_today = previous == ql.Date.todaysDate()
    settings.evaluationDate = DateUtils.to_ql_date(date)
    try:
        yield settings.evaluationDate
    finally:
        if tracking_today:
            settings.resetEvaluationDate()
        else:
            settings.evaluationDate = previous


class DateUtils:
    """Small helpers to keep date/period parsing in one place."""

    @staticmethod
    def to_ql_date(d):
        """Convert common Python date representations into QuantLib.Date."""
        if isinstance(d, ql.Date):
            return d
        if isinstance(d, str):
            d = pd.to_datetime(d).date()
        return ql.Date(d.day, d.month, d.year)

    @staticmethod
    def to_iso(d):
        """ISO string for a QuantLib.Date (used in reports)."""
        return "%04d-%02d-%02d" % (d.year(), d.month(), d.dayOfMonth())

    @staticmethod
    def parse_period(s):
        """Parse strings such as '1W', '3Mo', '1Yr', '10Yr', '6M', '1Y'."""
        if isinstance(s, ql.Period):
            return s
        s = str(s).strip().upper()
        s = s.replace("MONTH", "M").replace("MO", "M")
        s = s.replace("YEAR", "Y").replace("YR", "Y")
        s = s.replace("WEEK", "W").replace("WK", "W")
        if s.endswith("M"):
            return ql.Period(int(s[:-1]), ql.Months)
        if s.endswith("Y"):
            return ql.Period(int(s[:-1]), ql.Years)
        if s.endswith("W"):
            return ql.Period(int(s[:-1]), ql.Weeks)
        if s.endswith("D"):
            return ql.Period(int(s[:-1]), ql.Days)
        # Anything else goes to QuantLib's parser, which raises on garbage.
        return ql.Period(s)

    @staticmethod
    def years(n):
        """Period of ``n`` whole years; ``n`` must be positive."""
        n = int(n)
        if n <= 0:
            raise ValueError(f"Period length must be positive, got {n}Y")
        return ql.Period(n, ql.Years)
