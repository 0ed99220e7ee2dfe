"""주담대 금리 조정 - 대출 수요 피드백 (비례 제어)"""

import logging
from dataclasses import dataclass

from ..core.types import MONTHS_IN_YEAR
from .counters import MonthlyCounters

logger = logging.getLogger(__name__)


def annuity_payment_factor(monthly_rate: float, n_payments: int) -> float:
    """원리금균등 월상환액 / 원금"""
    if monthly_rate == 0.0:
        return 1.0 / n_payments
    return monthly_rate / (1.0 - (1.0 + monthly_rate) ** (-n_payments))


@dataclass
class RateState:
    interest_spread: float = 0.0          # 주담대 금리 - 기준금리 (연)
    supply_target: float = 0.0            # 이번 달 목표 대출 공급액
    monthly_payment_factor: float = 0.0   # 원리금균등 (자가거주)
    monthly_payment_factor_btl: float = 0.0  # 이자만 상환 (임대투자)


class RateController:
    """월간 금리 조정기

    지난달 실적과 목표의 차이에 비례해 금리를 움직인다. 한 번에 균형으로
    가지 않고 지난달 수요를 맞췄을 금리 쪽으로 조금씩 이동한다.
    """

    def __init__(self, cfg, central_bank, counters: MonthlyCounters):
        """cfg: BankConfig"""
        self.cfg = cfg
        self.central_bank = central_bank
        self.counters = counters
        self.n_payments = cfg.n_payments
        self.state = RateState()
        self.init()

    def init(self):
        self.state = RateState()
        self.set_mortgage_interest_rate(self.cfg.initial_rate)
        self.counters.reset()

    def step(self, total_population: int) -> float:
        """한 달 1회, 심사 전에 호출. 새 금리 반환"""
        last_target = self.state.supply_target
        self.state.supply_target = self.cfg.credit_supply_target * total_population
        rate = self.recalculate_interest_rate(last_target)
        self.set_mortgage_interest_rate(rate)
        logger.debug(
            "rate step: supply=%.0f target=%.0f -> rate=%.5f spread=%.5f",
            self.counters.supply_val, last_target, rate, self.state.interest_spread,
        )
        self.counters.reset()
        return rate

    def recalculate_interest_rate(self, last_target: float) -> float:
        gap = self.counters.supply_val - last_target
        rate = self.mortgage_interest_rate + self.cfg.rate_sensitivity * gap
        return max(rate, self.central_bank.base_rate)

    @property
    def mortgage_interest_rate(self) -> float:
        return self.central_bank.base_rate + self.state.interest_spread

    @property
    def interest_spread(self) -> float:
        return self.state.interest_spread

    @property
    def supply_target(self) -> float:
        return self.state.supply_target

    def set_mortgage_interest_rate(self, rate: float):
        self.state.interest_spread = rate - self.central_bank.base_rate
        self.recalculate_monthly_payment_factor()

    def recalculate_monthly_payment_factor(self):
        r = self.mortgage_interest_rate / MONTHS_IN_YEAR
        self.state.monthly_payment_factor = annuity_payment_factor(r, self.n_payments)
        self.state.monthly_payment_factor_btl = r

    def monthly_payment_factor(self, is_home: bool) -> float:
        if is_home:
            return self.state.monthly_payment_factor
        return self.state.monthly_payment_factor_btl
