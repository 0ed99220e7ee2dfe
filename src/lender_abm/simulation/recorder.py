"""통계 기록"""

from dataclasses import dataclass

import numpy as np


@dataclass
class MonthlyStats:
    """월간 통계"""
    month: int = 0

    # 금리
    mortgage_rate: float = 0.0
    base_rate: float = 0.0
    interest_spread: float = 0.0

    # 대출 공급
    supply_target: float = 0.0
    supply_val: float = 0.0
    n_approved: int = 0
    n_oo_mortgages: int = 0
    n_oo_over_lti: int = 0
    n_btl: int = 0
    outstanding_mortgages: int = 0
    outstanding_principal: float = 0.0

    # 지표
    oo_lti_mean_above_median: float = 0.0
    oo_ltv_mean_above_median: float = 0.0
    btl_ltv_mean: float = 0.0
    expected_flow_yield: float = 0.0

    # 가구
    first_time_buyer_rate: float = 0.0
    mean_bank_balance: float = 0.0

    def to_dict(self) -> dict:
        d = {}
        for k, v in self.__dict__.items():
            if isinstance(v, np.generic):
                d[k] = v.item()
            else:
                d[k] = v
        return d


class Recorder:
    """시뮬레이션 통계 기록기"""

    def __init__(self):
        self.history: list[MonthlyStats] = []

    def record(self, month: int, bank, credit_supply, indicators, population,
               rental_stats, counters_snapshot: dict) -> MonthlyStats:
        """한 달치 통계 기록

        counters_snapshot: 월 카운터는 다음 달 초에 리셋되므로 심사 직후 값을 받는다
        """
        n = max(len(population), 1)
        stats = MonthlyStats(
            month=month,
            mortgage_rate=bank.mortgage_interest_rate,
            base_rate=bank.central_bank.base_rate,
            interest_spread=bank.interest_spread,

            supply_target=bank.supply_target,
            supply_val=counters_snapshot['supply_val'],
            n_approved=credit_supply.get_n_approved_mortgages(),
            n_oo_mortgages=counters_snapshot['n_oo_mortgages'],
            n_oo_over_lti=counters_snapshot['n_oo_over_lti'],
            n_btl=credit_supply.get_n_btl_mortgages(),
            outstanding_mortgages=len(bank.mortgages),
            outstanding_principal=bank.mortgages.total_principal(),

            oo_lti_mean_above_median=indicators.owner_occupier_lti_mean_above_median(),
            oo_ltv_mean_above_median=indicators.owner_occupier_ltv_mean_above_median(),
            btl_ltv_mean=indicators.buy_to_let_ltv_mean(),
            expected_flow_yield=rental_stats.get_exp_av_flow_yield(),

            first_time_buyer_rate=population.first_time_buyer_rate,
            mean_bank_balance=population.total_bank_balance / n,
        )
        self.history.append(stats)
        return stats

    def get_rate_series(self) -> np.ndarray:
        """(n_months,) 주담대 금리 시계열"""
        return np.array([s.mortgage_rate for s in self.history])

    def get_summary(self) -> dict:
        """최종 요약"""
        if not self.history:
            return {}
        first = self.history[0]
        last = self.history[-1]
        supply = np.array([s.supply_val for s in self.history])
        target = np.array([s.supply_target for s in self.history])

        return {
            'months': len(self.history),
            'initial_mortgage_rate': first.mortgage_rate,
            'final_mortgage_rate': last.mortgage_rate,
            'final_interest_spread': last.interest_spread,
            'total_approvals': sum(s.n_approved for s in self.history),
            'total_new_credit': float(supply.sum()),
            'mean_supply_to_target': float(np.mean(supply / target)) if np.all(target > 0) else 0.0,
            'total_oo_over_lti': sum(s.n_oo_over_lti for s in self.history),
            'final_outstanding_mortgages': last.outstanding_mortgages,
            'final_outstanding_principal': last.outstanding_principal,
            'final_first_time_buyer_rate': last.first_time_buyer_rate,
        }

    def reset(self):
        self.history = []
