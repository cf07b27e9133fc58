"""Deposit / futures / swap discount-curve bootstrapping.

The market snapshot below is a February 2015 USD setup: four cash deposits,
six consecutive IMM Eurodollar-style futures and five annual swaps against
3M USD Libor, all on a joint London/New York calendar.

The reference values printed next to each reporting date are the numbers
that were quoted alongside this snapshot. They were never checked against
a live build and should be read as labels, not as expected results.
"""

from dataclasses import dataclass

import QuantLib as ql
import pandas as pd

from .utils import DateUtils, evaluation_date, london_new_york_calendar


@dataclass(frozen=True)
class DepositQuote:
    tenor: str
    rate: float


@dataclass(frozen=True)
class FuturesQuote:
    price: float


@dataclass(frozen=True)
class SwapQuote:
    tenor: str
    rate: float


@dataclass(frozen=True)
class CurveQuotes:
    deposits: tuple
    futures: tuple
    swaps: tuple


SNAPSHOT_2015 = CurveQuotes(
    deposits=(
        DepositQuote("1W", 0.001375),
        DepositQuote("4W", 0.001717),
        DepositQuote("2M", 0.002112),
        DepositQuote("3M", 0.002581),
    ),
    futures=(
        FuturesQuote(99.725),
        FuturesQuote(99.585),
        FuturesQuote(99.385),
        FuturesQuote(99.16),
        FuturesQuote(98.93),
        FuturesQuote(98.715),
    ),
    swaps=(
        SwapQuote("2Y", 0.0089268),
        SwapQuote("3Y", 0.0123343),
        SwapQuote("4Y", 0.0147985),
        SwapQuote("5Y", 0.0165843),
        SwapQuote("6Y", 0.0179191),
    ),
)

FIXING_DAYS = 2
FUTURES_MONTHS = 3

# (date, reference label, compounding); Simple up to the last future, then
# annually compounded.
REPORT_POINTS = (
    (ql.Date(25, 2, 2015), "0.1375", ql.Simple),
    (ql.Date(18, 3, 2015), "0.1717", ql.Simple),
    (ql.Date(20, 4, 2015), "0.2112", ql.Simple),
    (ql.Date(18, 5, 2015), "0.2581", ql.Simple),
    (ql.Date(17, 6, 2015), "0.25093", ql.Simple),
    (ql.Date(16, 9, 2015), "0.32228", ql.Simple),
    (ql.Date(16, 12, 2015), "0.41111", ql.Simple),
    (ql.Date(16, 3, 2016), "0.51112", ql.Simple),
    (ql.Date(15, 6, 2016), "0.61698", ql.Simple),
    (ql.Date(21, 9, 2016), "0.73036", ql.Compounded),
    (ql.Date(21, 2, 2017), "0.89446", ql.Compounded),
    (ql.Date(20, 2, 2018), "1.23937", ql.Compounded),
    (ql.Date(19, 2, 2019), "1.49085", ql.Compounded),
    (ql.Date(18, 2, 2020), "1.67450", ql.Compounded),
)


def spot_dates(settlement_date, calendar, fixing_days=FIXING_DAYS):
    """Return ``(today, settlement)`` with settlement adjusted to a business day."""
    settlement = calendar.adjust(DateUtils.to_ql_date(settlement_date))
    today = calendar.advance(settlement, -int(fixing_days), ql.Days)
    return today, settlement


def build_rate_helpers(quotes, settlement_date, calendar, fixing_days=FIXING_DAYS):
    """Deposit, futures and swap helpers in that order.

    Futures start on consecutive IMM dates from the first one after
    ``settlement_date``. Swaps pay an annual unadjusted Act/360 fixed leg
    against 3M USD Libor, which projects off the curve being built.
    """
    deposit_dc = ql.Actual360()
    helpers = []

    for q in quotes.deposits:
        helpers.append(
            ql.DepositRateHelper(
                ql.QuoteHandle(ql.SimpleQuote(float(q.rate))),
                DateUtils.parse_period(q.tenor),
                int(fixing_days),
                calendar,
                ql.ModifiedFollowing,
                True,
                deposit_dc,
            )
        )

    imm = ql.IMM.nextDate(settlement_date)
    for i, q in enumerate(quotes.futures):
        if i > 0:
            imm = ql.IMM.nextDate(imm + 1)
        helpers.append(
            ql.FuturesRateHelper(
                ql.QuoteHandle(ql.SimpleQuote(float(q.price))),
                imm,
                FUTURES_MONTHS,
                calendar,
                ql.ModifiedFollowing,
                True,
                deposit_dc,
            )
        )

    floating_index = ql.USDLibor(ql.Period(3, ql.Months))
    for q in quotes.swaps:
        helpers.append(
            ql.SwapRateHelper(
                ql.QuoteHandle(ql.SimpleQuote(float(q.rate))),
                DateUtils.parse_period(q.tenor),
                calendar,
                ql.Annual,
                ql.Unadjusted,
                ql.Actual360(),
                floating_index,
            )
        )

    return helpers


class BootstrappedCurve:
    """A piecewise log-linear discount curve together with its evaluation date.

    Every query runs with QuantLib's evaluation date set to ``today``, so the
    rate helpers keep the dates they were bootstrapped with.
    """

    def __init__(self, curve, today, helpers):
        self.curve = curve
        self.today = today
        self.helpers = helpers

    @property
    def reference_date(self):
        with evaluation_date(self.today):
            return self.curve.referenceDate()

    def zero_rate(self, date, day_counter, compounding, frequency=ql.Annual):
        with evaluation_date(self.today):
            return float(self.curve.zeroRate(date, day_counter, compounding, frequency).rate())

    def discount(self, date):
        with evaluation_date(self.today):
            return float(self.curve.discount(date))

    def forward_rate(self, d1, d2, day_counter, compounding, frequency=ql.Annual):
        with evaluation_date(self.today):
            return float(self.curve.forwardRate(d1, d2, day_counter, compounding, frequency).rate())


def bootstrap_curve(quotes=SNAPSHOT_2015, settlement_date=None, calendar=None,
                    day_counter=None, fixing_days=FIXING_DAYS):
    """Bootstrap a discount curve from ``quotes``.

    ``settlement_date`` defaults to 18 Feb 2015 and ``calendar`` to the joint
    London/New York calendar. Today is ``fixing_days`` business days before
    settlement. The curve is anchored at today: the swaps' Libor legs follow
    the index's own spot rule and can start before ``settlement``.
    """
    calendar = calendar or london_new_york_calendar()
    day_counter = day_counter or ql.Actual360()
    if settlement_date is None:
        settlement_date = ql.Date(18, 2, 2015)
    today, settlement = spot_dates(settlement_date, calendar, fixing_days)

    with evaluation_date(today):
        helpers = build_rate_helpers(quotes, settlement, calendar, fixing_days)
        curve = ql.PiecewiseLogLinearDiscount(today, helpers, day_counter)
        # Force the bootstrap while today's date is in effect.
        curve.discount(settlement)
    return BootstrappedCurve(curve, today, helpers)


def zero_rate_report(curve, points=REPORT_POINTS, day_counter=None, frequency=ql.Annual):
    """Zero rates at each reporting point as a DataFrame.

    Columns: date, label, compounding, zero_rate.
    """
    day_counter = day_counter or ql.Actual360()
    rows = []
    for date, label, compounding in points:
        rows.append(
            {
                "date": DateUtils.to_iso(date),
                "label": label,
                "compounding": "simple" if compounding == ql.Simple else "compounded",
                "zero_rate": curve.zero_rate(date, day_counter, compounding, frequency),
            }
        )
    return pd.DataFrame(rows, columns=["date", "label", "compounding", "zero_rate"])
