"""차입 가구 인구

소득(로그정규)과 유동자산(파레토)을 NumPy 로 한 번에 샘플링한 뒤
은행 심사가 1건씩 읽을 수 있도록 Household 객체로 묶는다.
"""

import numpy as np

from .household import Household


class HouseholdPopulation:
    """가구 컨테이너"""

    def __init__(self, cfg, n: int):
        """cfg: PopulationConfig"""
        self.cfg = cfg
        self.n = n
        self.households: list[Household] = []

    def initialize(self, rng: np.random.Generator):
        cfg = self.cfg
        n = self.n

        # 월 총소득 (로그정규분포)
        income = np.clip(
            rng.lognormal(np.log(cfg.income_median), cfg.income_sigma, n),
            400, 50000
        )

        # 유동자산 (파레토분포)
        wealth = cfg.wealth_median * (rng.pareto(cfg.wealth_alpha, n) + 1)
        wealth = np.clip(wealth, 0, 5_000_000)

        # 유형: 임대투자자 / 생애최초 / 기존 보유자
        is_investor = rng.random(n) < cfg.investor_ratio
        is_ftb = (~is_investor) & (rng.random(n) < cfg.first_time_buyer_ratio)

        self.households = [
            Household(
                id=i,
                bank_balance=float(wealth[i]),
                monthly_gross_income=float(income[i]),
                net_income_ratio=cfg.net_income_ratio,
                is_first_time_buyer=bool(is_ftb[i]),
                is_investor=bool(is_investor[i]),
            )
            for i in range(n)
        ]

    def __len__(self) -> int:
        return len(self.households)

    def __iter__(self):
        return iter(self.households)

    def distribute_income(self):
        """월 저축: 순소득의 일정 비율을 잔고에 적립"""
        rate = self.cfg.savings_rate
        for h in self.households:
            h.bank_balance += rate * h.monthly_net_employment_income

    def sample_applicants(self, rng: np.random.Generator) -> list[Household]:
        """이번 달 대출 신청 가구 (무작위 순서)"""
        mask = rng.random(self.n) < self.cfg.application_rate
        ids = np.where(mask)[0]
        rng.shuffle(ids)
        return [self.households[i] for i in ids]

    @property
    def total_bank_balance(self) -> float:
        return float(sum(h.bank_balance for h in self.households))

    @property
    def first_time_buyer_rate(self) -> float:
        if not self.households:
            return 0.0
        return float(np.mean([h.is_first_time_buyer for h in self.households]))
