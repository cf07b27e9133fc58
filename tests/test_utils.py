from datetime import date

import QuantLib as ql
import pytest

from rates_workbench.utils import (
    DateUtils,
    business_day_convention_name,
    evaluation_date,
    round_half_away,
)


@pytest.mark.parametrize(
    "value, places, expected",
    [
        (0.046279, 5, 0.04628),
        (1.25, 1, 1.3),
        (-1.25, 1, -1.3),
        (2.5, 0, 3.0),
        (-2.5, 0, -3.0),
    ],
)
def test_round_half_away(value, places, expected):
    assert round_half_away(value, places) == pytest.approx(expected, abs=1e-12)


def test_evaluation_date_restores_previous():
    before = ql.Date(7, 7, 2007)
    ql.Settings.instance().evaluationDate = before
    with evaluation_date(ql.Date(15, 2, 2002)) as d:
        assert d == ql.Date(15, 2, 2002)
        assert ql.Settings.instance().evaluationDate == ql.Date(15, 2, 2002)
    assert ql.Settings.instance().evaluationDate == before


def test_evaluation_date_restores_on_error():
    before = ql.Date(7, 7, 2007)
    ql.Settings.instance().evaluationDate = before
    with pytest.raises(RuntimeError):
        with evaluation_date(date(2002, 2, 15)):
            raise RuntimeError("boom")
    assert ql.Settings.instance().evaluationDate == before


def test_to_ql_date():
    assert DateUtils.to_ql_date(date(2015, 2, 18)) == ql.Date(18, 2, 2015)
    assert DateUtils.to_ql_date("2015-02-18") == ql.Date(18, 2, 2015)
    assert DateUtils.to_iso(ql.Date(5, 3, 2016)) == "2016-03-05"


@pytest.mark.parametrize(
    "text, period",
    [
        ("1W", ql.Period(1, ql.Weeks)),
        ("4W", ql.Period(4, ql.Weeks)),
        ("3Mo", ql.Period(3, ql.Months)),
        ("10Yr", ql.Period(10, ql.Years)),
        ("7D", ql.Period(7, ql.Days)),
    ],
)
def test_parse_period(text, period):
    assert DateUtils.parse_period(text) == period


def test_years_rejects_non_positive():
    assert DateUtils.years(3) == ql.Period(3, ql.Years)
    with pytest.raises(ValueError):
        DateUtils.years(0)


def test_business_day_convention_name():
    assert business_day_convention_name(ql.ModifiedFollowing) == "ModifiedFollowing"
    assert business_day_convention_name(ql.Following) == "Following"


def test_evaluation_date_goes_back_to_tracking_today():
    ql.Settings.instance().resetEvaluationDate()
    with evaluation_date(ql.Date(15, 2, 2002)):
        pass
    assert ql.Settings.instance().evaluationDate == ql.Date.todaysDate()
    # still unpinned: a later explicit date is honoured and restored to today
    with evaluation_date(ql.Date(1, 3, 2003)):
        assert ql.Settings.instance().evaluationDate == ql.Date(1, 3, 2003)
    assert ql.Settings.instance().evaluationDate == ql.Date.todaysDate()
