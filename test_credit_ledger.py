"""신용 장부 + 대출 통계 수집기 테스트"""

import numpy as np
import pytest

from lender_abm.collectors.core_indicators import CoreIndicators, mean_above_median
from lender_abm.collectors.credit_supply import CreditSupply
from lender_abm.config.schema import RentalConfig
from lender_abm.core.errors import StaleQuoteError
from lender_abm.markets.rental_market import RentalMarketStats


class FailingCreditSupply:
    def record_loan(self, borrower, approval):
        raise RuntimeError("stats backend down")


def test_origination_adds_to_ledger_and_stats(make_bank, make_household):
    bank = make_bank()
    h = make_household(balance=100_000, gross=20_000)

    a = bank.request_loan(h, 200_000, 0.0, True)

    assert a in bank.mortgages
    assert len(bank.mortgages) == 1
    assert bank.counters.supply_val == pytest.approx(190_000)
    assert bank.counters.n_oo_mortgages == 1
    assert bank.credit_supply.current.n_approved == 1
    assert bank.credit_supply.current.n_ftb == 1


def test_void_origination_is_not_stored(make_bank, make_household):
    bank = make_bank()
    h = make_household(balance=300_000, gross=0.0)

    a = bank.request_loan(h, 200_000, 0.0, True)

    assert a.is_void
    assert len(bank.mortgages) == 0
    assert bank.counters.n_oo_mortgages == 0
    assert bank.credit_supply.current.n_approved == 0


def test_end_mortgage_contract(make_bank, make_household):
    bank = make_bank()
    h = make_household(balance=100_000, gross=20_000)
    a = bank.request_loan(h, 200_000, 0.0, True)

    assert bank.end_mortgage_contract(a) is True
    assert a not in bank.mortgages
    assert bank.end_mortgage_contract(a) is False


def test_identical_agreements_are_separate_contracts(make_bank, make_household):
    bank = make_bank()
    h = make_household(balance=500_000, gross=20_000)

    a = bank.request_loan(h, 200_000, 0.0, True)
    b = bank.request_loan(h, 200_000, 0.0, True)

    assert len(bank.mortgages) == 2
    bank.end_mortgage_contract(a)
    assert b in bank.mortgages


def test_sink_failure_does_not_fail_origination(make_bank, make_household):
    bank = make_bank(credit_supply=FailingCreditSupply())
    h = make_household(balance=100_000, gross=20_000)

    a = bank.request_loan(h, 200_000, 0.0, True)

    assert a in bank.mortgages
    assert bank.counters.n_oo_mortgages == 1


def test_ledger_totals_by_type(make_bank, make_household):
    bank = make_bank(flow_yield=0.08)
    home = make_household(balance=100_000, gross=20_000)
    investor = make_household(balance=100_000, ftb=False, investor=True)

    bank.request_loan(home, 200_000, 0.0, True)
    bank.request_loan(investor, 100_000, 0.0, False)

    assert bank.mortgages.total_principal() == pytest.approx(270_000)
    assert bank.mortgages.total_principal(buy_to_let=True) == pytest.approx(80_000)
    assert bank.mortgages.count(buy_to_let=False) == 1


def test_credit_supply_month_close(make_bank, make_household):
    supply = CreditSupply()
    bank = make_bank(flow_yield=0.08, credit_supply=supply)
    bank.request_loan(make_household(balance=100_000, gross=20_000), 200_000, 0.0, True)
    bank.request_loan(make_household(balance=100_000, ftb=False, investor=True), 100_000, 0.0, False)

    supply.step(bank.mortgages)

    assert supply.get_n_approved_mortgages() == 2
    assert supply.get_n_btl_mortgages() == 1
    assert supply.get_n_ftb_mortgages() == 1
    assert supply.get_oo_ltv() == pytest.approx(np.array([0.95]))
    assert supply.get_btl_ltv() == pytest.approx(np.array([0.8]))
    assert supply.total_oo_credit == pytest.approx(190_000)
    assert supply.current.n_approved == 0

    bank.request_loan(make_household(balance=100_000, gross=20_000), 400_000, 0.0, True)
    supply.step(bank.mortgages)
    assert supply.get_net_credit_growth() == pytest.approx(380_000 / 270_000 - 1)


def test_mean_above_median():
    assert mean_above_median(np.array([])) == 0.0
    assert mean_above_median(np.array([1.0, 2.0, 3.0, 4.0])) == pytest.approx(3.5)
    assert mean_above_median(np.array([2.0, 2.0])) == 2.0


def test_core_indicators_scale_to_reference_households(make_bank, make_household):
    supply = CreditSupply()
    bank = make_bank(credit_supply=supply)
    bank.request_loan(make_household(balance=100_000, gross=20_000), 200_000, 0.0, True)
    supply.step(bank.mortgages)

    ind = CoreIndicators(supply, bank, n_households=100, reference_households=1_000)

    assert ind.mortgage_approvals() == 10
    assert ind.advances_to_ftbs() == 10
    assert ind.advances_to_home_movers() == 0
    assert ind.interest_rate_spread() == pytest.approx(2.5)
    assert set(ind.to_dict()) >= {'oo_lti_mean_above_median', 'mortgage_approvals'}


def test_ledger_iterates_in_origination_order(make_bank, make_household):
    bank = make_bank()
    loans = [
        bank.request_loan(make_household(balance=100_000, gross=20_000), price, 0.0, True)
        for price in (150_000, 120_000, 180_000, 160_000, 140_000)
    ]

    assert list(bank.mortgages) == loans
    bank.end_mortgage_contract(loans[2])
    assert list(bank.mortgages) == loans[:2] + loans[3:]


def test_stale_quote_is_not_committed(make_bank, make_household):
    bank = make_bank()
    first = bank.request_approval(make_household(balance=100_000, gross=20_000), 200_000, 0.0, True)
    second = bank.request_approval(make_household(balance=100_000, gross=20_000), 200_000, 0.0, True)

    bank.commit(first)
    with pytest.raises(StaleQuoteError):
        bank.commit(second)
    with pytest.raises(StaleQuoteError):
        bank.commit(first)

    assert len(bank.mortgages) == 1
    assert bank.counters.n_oo_mortgages == 1


def test_quote_expires_at_month_step(make_bank, make_household):
    bank = make_bank()
    quote = bank.request_approval(make_household(balance=100_000, gross=20_000), 200_000, 0.0, True)

    bank.step(1000)

    with pytest.raises(StaleQuoteError):
        bank.commit(quote)
    assert bank.counters.supply_val == 0.0


def test_month_close_keeps_only_current_and_last_month():
    supply = CreditSupply()
    for _ in range(50):
        supply.step()

    assert set(vars(supply)) == {
        'current', 'last', 'total_oo_credit', 'total_btl_credit', 'net_credit_growth',
    }


def test_rental_yield_feed_keeps_only_smoothed_value():
    stats = RentalMarketStats(RentalConfig(initial_flow_yield=0.05, yield_smoothing=0.5))
    for _ in range(50):
        stats.record_yield(0.07)

    assert stats.get_exp_av_flow_yield() == pytest.approx(0.07)
    assert set(vars(stats)) == {'cfg', 'exp_av_flow_yield'}
