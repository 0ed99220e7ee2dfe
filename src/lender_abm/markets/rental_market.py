"""임대시장 수익률 피드"""

import numpy as np


class RentalMarketStats:
    """기대 평균 임대수익률 (임대투자 대출 ICR 심사용)

    관측 수익률을 지수평활해서 기대값을 만든다. 가격 결정/매칭은 다루지 않는다.
    """

    def __init__(self, cfg):
        """cfg: RentalConfig"""
        self.cfg = cfg
        self.exp_av_flow_yield = cfg.initial_flow_yield

    def get_exp_av_flow_yield(self) -> float:
        return self.exp_av_flow_yield

    def record_yield(self, observed_yield: float) -> float:
        """관측 수익률 반영 (음수는 0으로)"""
        observed_yield = max(float(observed_yield), 0.0)
        w = self.cfg.yield_smoothing
        self.exp_av_flow_yield = (1.0 - w) * self.exp_av_flow_yield + w * observed_yield
        return self.exp_av_flow_yield

    def step(self, rng: np.random.Generator) -> float:
        """월간 관측 (외부 임대시장 대신 노이즈 샘플)"""
        observed = rng.normal(self.cfg.initial_flow_yield, self.cfg.yield_volatility)
        return self.record_yield(observed)

    def reset(self):
        self.exp_av_flow_yield = self.cfg.initial_flow_yield
