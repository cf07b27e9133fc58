import QuantLib as ql
import pytest

from rates_workbench.market import (
    MarketLoader,
    diagonal_basket,
    flat_curve,
    swaption_volatility_list,
    usd_libor_3m,
)


def test_hard_coded_volatilities():
    assert swaption_volatility_list() == [0.1148, 0.1108, 0.1070, 0.1021, 0.1000]


@pytest.mark.parametrize("n", [1, 2, 5, 9])
def test_diagonal_basket_expiry_plus_tenor_is_constant(n):
    vols = [0.1 + 0.001 * i for i in range(n)]
    basket = diagonal_basket(vols)
    assert len(basket) == n
    for i, q in enumerate(basket):
        assert q.expiry_years == i + 1
        assert q.tenor_years == n - i
        assert q.expiry_years + q.tenor_years == n + 1
        assert q.volatility == vols[i]


def test_diagonal_basket_empty():
    assert diagonal_basket([]) == []


def test_flat_curve_rate(cfg):
    h = flat_curve(cfg.settlement_date, 0.05, ql.Actual365Fixed())
    z = h.currentLink().zeroRate(1.0, ql.Continuous).rate()
    assert z == pytest.approx(0.05, abs=1e-12)
    assert h.referenceDate() == cfg.settlement_date


def test_index_shares_the_curve(curve):
    index = usd_libor_3m(curve)
    assert index.forwardingTermStructure().referenceDate() == curve.referenceDate()


def test_market_loader_uses_config(cfg):
    loader = MarketLoader(cfg)
    assert len(loader.basket()) == len(cfg.swaption_vols)
    assert loader.curve().referenceDate() == cfg.settlement_date
