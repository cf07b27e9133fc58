import QuantLib as ql
import pytest

from rates_workbench.indices import (
    DEFAULT_INDEX_KINDS,
    IndexKind,
    RateIndexDescriptor,
    build_index,
    describe_index,
    descriptors_frame,
    inspect_indices,
)


def test_all_default_kinds_have_well_defined_conventions():
    descriptors = inspect_indices()
    assert len(descriptors) == len(DEFAULT_INDEX_KINDS) == 3
    for d in descriptors:
        assert d.fixing_days >= 0
        assert d.fixing_calendar
        assert d.day_counter
        assert d.currency == "USD"


def test_fed_funds_is_overnight_with_no_fixing_lag():
    d = describe_index(build_index(IndexKind.FED_FUNDS))
    assert d.fixing_days == 0
    assert d.day_counter == ql.Actual360().name()


def test_libor_3m_has_two_day_fixing_lag():
    d = describe_index(build_index(IndexKind.USD_LIBOR_3M))
    assert d.fixing_days == 2
    assert d.business_day_convention == "ModifiedFollowing"
    assert d.end_of_month is True


def test_build_index_accepts_kind_value_and_rejects_unknown():
    assert build_index("FedFunds").name() == build_index(IndexKind.FED_FUNDS).name()
    with pytest.raises(ValueError):
        build_index("EURIBOR6M")


def test_descriptor_is_immutable():
    d = inspect_indices()[0]
    assert isinstance(d, RateIndexDescriptor)
    with pytest.raises(Exception):
        d.fixing_days = 5


def test_build_index_forwards_on_given_curve(curve):
    index = build_index(IndexKind.USD_LIBOR_3M, curve)
    assert index.forwardingTermStructure()


def test_descriptors_frame_one_row_per_index():
    frame = descriptors_frame(inspect_indices())
    assert list(frame.columns) == [
        "name",
        "fixing_days",
        "fixing_calendar",
        "business_day_convention",
        "end_of_month",
        "day_counter",
        "currency",
    ]
    assert len(frame) == 3
