"""규제 LTI soft 상한 오버라이드 테스트"""

import pytest

from lender_abm.core.errors import InvestorLoanToIncomeError
from lender_abm.lending.counters import MonthlyCounters
from lender_abm.lending.policy import BankPolicy, effective_lti_limit


def test_smoothed_fraction_at_start_of_month():
    counters = MonthlyCounters()
    assert counters.over_lti_fraction() == 1.0

    counters.n_oo_mortgages = 9
    counters.n_oo_over_lti = 1
    assert counters.over_lti_fraction() == pytest.approx(0.2)


def test_bank_ceiling_still_binds_when_tighter_than_regulator(make_bank):
    # 은행 4.0 / 규제 4.5 / 허용 15%, 이번 달 5건 모두 초과
    bank = make_bank(
        bank={'max_ftb_lti': 4.0},
        central_bank={'max_ftb_lti': 4.5, 'max_fraction_oo_over_lti': 0.15},
    )
    bank.counters.n_oo_mortgages = 5
    bank.counters.n_oo_over_lti = 5

    assert bank.counters.over_lti_fraction() == 1.0
    assert bank.get_loan_to_income_limit(True, True) == 4.0


def test_regulator_ceiling_applies_only_above_tolerated_fraction(make_bank):
    bank = make_bank(central_bank={'max_fraction_oo_over_lti': 0.15})
    bank.counters.n_oo_mortgages = 19
    bank.counters.n_oo_over_lti = 1       # (1+1)/(19+1) = 0.10

    assert bank.get_loan_to_income_limit(True, True) == 6.0

    bank.counters.n_oo_over_lti = 3       # (3+1)/(19+1) = 0.20
    assert bank.get_loan_to_income_limit(True, True) == 4.5


def test_effective_ceiling_is_monotone_in_tolerated_fraction():
    counters = MonthlyCounters(n_oo_mortgages=10, n_oo_over_lti=3)
    limits = [
        effective_lti_limit(6.0, 4.5, counters, fraction / 20.0)
        for fraction in range(21)
    ]
    assert all(a <= b for a, b in zip(limits, limits[1:]))
    assert limits[0] == 4.5
    assert limits[-1] == 6.0


def test_ceiling_is_path_dependent_within_a_month(make_bank, make_household):
    bank = make_bank(central_bank={'max_fraction_oo_over_lti': 0.5})
    bank.step(1000)

    first = make_household(balance=300_000, gross=2_000)
    twin = make_household(balance=300_000, gross=2_000)

    # 월초: 1.0 > 0.5 → 규제 4.5
    a = bank.request_loan(first, 400_000, 0.0, True)
    assert a.principal == pytest.approx(24_000 * 4.5)
    assert bank.counters.n_oo_mortgages == 1
    assert bank.counters.n_oo_over_lti == 0      # 정확히 4.5 는 초과 아님

    # (0+1)/(1+1) = 0.5, 초과 아님 → 은행 6.0
    b = bank.request_loan(twin, 400_000, 0.0, True)
    assert b.principal == pytest.approx(24_000 * 6.0)
    assert bank.counters.n_oo_over_lti == 1

    # (1+1)/(2+1) > 0.5 → 다시 4.5
    third = make_household(balance=300_000, gross=2_000)
    c = bank.request_approval(third, 400_000, 0.0, True)
    assert c.principal == pytest.approx(24_000 * 4.5)


def test_buy_to_let_originations_do_not_touch_oo_counters(make_bank, make_household):
    bank = make_bank(flow_yield=0.08)
    h = make_household(balance=100_000, ftb=False, investor=True)

    a = bank.request_loan(h, 100_000, 0.0, False)

    assert a.principal > 0
    assert bank.counters.supply_val == pytest.approx(a.principal)
    assert bank.counters.n_oo_mortgages == 0
    assert bank.counters.n_oo_over_lti == 0


def test_lti_lookup_for_investor_is_a_logic_error(make_bank):
    bank = make_bank()

    with pytest.raises(InvestorLoanToIncomeError):
        bank.get_loan_to_income_limit(False, False, borrower_id=7)
    with pytest.raises(InvestorLoanToIncomeError):
        bank.central_bank.get_loan_to_income_limit(False, False)
    with pytest.raises(InvestorLoanToIncomeError):
        BankPolicy().loan_to_income_limit(True, False)


def test_policy_change_operations():
    policy = BankPolicy()
    policy.set_ltv_limits(ftb=0.9, btl=0.75)
    policy.set_lti_limits(oo=5.0)

    assert policy.loan_to_value_limit(True, True) == 0.9
    assert policy.loan_to_value_limit(False, True) == 0.90
    assert policy.loan_to_value_limit(True, False) == 0.75
    assert policy.loan_to_income_limit(False, True) == 5.0
    assert policy.loan_to_income_limit(True, True) == 6.0
