"""거시건전성 핵심 지표 (LTV/LTI 분포, 승인건수, 금리 스프레드)"""

import numpy as np


def mean_above_median(values: np.ndarray) -> float:
    """중앙값 초과 표본의 평균 (표본 없으면 0)"""
    values = np.asarray(values, dtype=np.float64)
    if values.size == 0:
        return 0.0
    median = np.median(values)
    above = values[values > median]
    if above.size == 0:
        return float(median)
    return float(np.mean(above))


class CoreIndicators:
    """직전 마감 월 대출 통계로 지표 계산"""

    def __init__(self, credit_supply, bank, n_households: int, reference_households: int = None):
        self.credit_supply = credit_supply
        self.bank = bank
        self.n_households = n_households
        self.reference_households = reference_households or n_households

    def _scale(self, count: int) -> int:
        """모델 가구 수 → 기준 가구 수 환산"""
        if self.n_households <= 0:
            return 0
        return count * self.reference_households // self.n_households

    def owner_occupier_lti_mean_above_median(self) -> float:
        return mean_above_median(self.credit_supply.get_oo_lti())

    def owner_occupier_ltv_mean_above_median(self) -> float:
        return mean_above_median(self.credit_supply.get_oo_ltv())

    def buy_to_let_ltv_mean(self) -> float:
        btl = self.credit_supply.get_btl_ltv()
        return float(np.mean(btl)) if btl.size else 0.0

    def household_credit_growth(self) -> float:
        """연율화 신규대출 증가율 (%)"""
        return self.credit_supply.get_net_credit_growth() * 12.0 * 100.0

    def mortgage_approvals(self) -> int:
        return self._scale(self.credit_supply.get_n_approved_mortgages())

    def advances_to_ftbs(self) -> int:
        return self._scale(self.credit_supply.get_n_ftb_mortgages())

    def advances_to_btl(self) -> int:
        return self._scale(self.credit_supply.get_n_btl_mortgages())

    def advances_to_home_movers(self) -> int:
        return self.mortgage_approvals() - self.advances_to_ftbs() - self.advances_to_btl()

    def interest_rate_spread(self) -> float:
        """은행 금리 - 기준금리 (%)"""
        return 100.0 * self.bank.interest_spread

    def to_dict(self) -> dict:
        return {
            'oo_lti_mean_above_median': self.owner_occupier_lti_mean_above_median(),
            'oo_ltv_mean_above_median': self.owner_occupier_ltv_mean_above_median(),
            'btl_ltv_mean': self.buy_to_let_ltv_mean(),
            'credit_growth_pct': self.household_credit_growth(),
            'mortgage_approvals': self.mortgage_approvals(),
            'advances_to_ftbs': self.advances_to_ftbs(),
            'advances_to_btl': self.advances_to_btl(),
            'advances_to_home_movers': self.advances_to_home_movers(),
            'interest_rate_spread_pct': self.interest_rate_spread(),
        }
