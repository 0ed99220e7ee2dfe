"""공용 테스트 픽스처"""

import pytest

from lender_abm.agents.household import Household
from lender_abm.collectors.credit_supply import CreditSupply
from lender_abm.config.schema import BankConfig, CentralBankConfig, RentalConfig
from lender_abm.institutions.central_bank import CentralBank
from lender_abm.lending.bank import Bank
from lender_abm.markets.rental_market import RentalMarketStats


@pytest.fixture
def make_bank():
    """Bank 생성기: make_bank(bank={...}, central_bank={...}, flow_yield=0.05)"""
    def _make(bank=None, central_bank=None, flow_yield=0.05, credit_supply=None):
        cb = CentralBank(CentralBankConfig(**(central_bank or {})))
        rental = RentalMarketStats(RentalConfig(initial_flow_yield=flow_yield))
        if credit_supply is None:
            credit_supply = CreditSupply()
        b = Bank(BankConfig(**(bank or {})), cb, rental, credit_supply)
        b.init()
        return b
    return _make


@pytest.fixture
def make_household():
    counter = iter(range(1, 10_000))

    def _make(balance=100_000.0, gross=2_000.0, ftb=True, net_ratio=0.75, investor=False):
        return Household(
            id=next(counter),
            bank_balance=balance,
            monthly_gross_income=gross,
            net_income_ratio=net_ratio,
            is_first_time_buyer=ftb,
            is_investor=investor,
        )
    return _make
