"""Pydantic 기반 설정 스키마 - JSON 검증 및 기본값"""

from pydantic import BaseModel, Field, model_validator
from typing import Literal, Optional


class BankConfig(BaseModel):
    """민간은행 (대출기관) 내부 정책"""
    initial_rate: float = 0.03                # 초기 주담대 금리 (연)
    max_ftb_ltv: float = 0.95                 # 생애최초 LTV 상한
    max_oo_ltv: float = 0.90                  # 자가거주 LTV 상한
    max_btl_ltv: float = 0.80                 # 임대투자 LTV 상한
    max_ftb_lti: float = 6.0                  # 생애최초 LTI 상한 (hard)
    max_oo_lti: float = 6.0                   # 자가거주 LTI 상한 (hard)
    credit_supply_target: float = 380.0       # 가구당 월간 목표 대출 공급액
    # 공급 격차 1파운드당 금리 반응 (0.5 / dDemand/dInterest), 잠정 값
    rate_sensitivity: float = 0.5 / 10e10
    mortgage_duration_years: int = 25

    @property
    def n_payments(self) -> int:
        return self.mortgage_duration_years * 12


class CentralBankConfig(BaseModel):
    """중앙은행 거시건전성 정책"""
    base_rate: float = 0.005
    max_ftb_lti: float = 4.5                  # 규제 LTI 상한 (soft)
    max_oo_lti: float = 4.5
    max_fraction_oo_over_lti: float = 0.15    # LTI 상한 초과 허용 비율
    btl_icr_limit: float = 1.25               # 임대수익/이자 최소 배수
    affordability_coefficient: float = 0.5    # 월상환액/월순소득 상한


class RentalConfig(BaseModel):
    """임대시장 수익률 피드"""
    initial_flow_yield: float = 0.05          # 기대 평균 임대수익률 (연)
    yield_smoothing: float = 0.1              # 지수평활 가중치
    yield_volatility: float = 0.002           # 월간 관측 노이즈


class PopulationConfig(BaseModel):
    """차입 가구 구성"""
    income_median: float = 2500.0             # 월 총소득 중앙값
    income_sigma: float = 0.55
    net_income_ratio: float = 0.75            # 순소득/총소득
    wealth_median: float = 25000.0            # 유동자산 (파레토)
    wealth_alpha: float = 1.16
    first_time_buyer_ratio: float = 0.45
    investor_ratio: float = 0.08
    application_rate: float = 0.02            # 월간 대출 신청 확률
    savings_rate: float = 0.08                # 월 순소득 중 저축 비율
    # 최대 가능가격 대비 희망가격 범위. 1 을 넘으면 계약금이 유동자산을 초과한다
    price_to_max_low: float = Field(default=0.6, gt=0.0, le=1.0)
    price_to_max_high: float = Field(default=1.0, gt=0.0, le=1.0)
    down_payment_ratio_mean: float = 0.3      # 유동자산 중 희망 계약금 비율
    mortgage_termination_rate: float = 0.008  # 월간 계약 종료(매도/상환) 확률

    @model_validator(mode="after")
    def _check_price_range(self):
        if self.price_to_max_low > self.price_to_max_high:
            raise ValueError(
                f"price_to_max_low ({self.price_to_max_low}) > "
                f"price_to_max_high ({self.price_to_max_high})"
            )
        return self


PolicyType = Literal[
    "set_base_rate",
    "set_central_bank_lti",
    "set_max_fraction_over_lti",
    "set_icr_limit",
    "set_bank_ltv",
    "set_bank_lti",
]


class PolicyEvent(BaseModel):
    """시간에 따른 정책 변경"""
    month: int = Field(ge=0)
    type: PolicyType
    params: dict = Field(default_factory=dict)


class InstitutionsConfig(BaseModel):
    """제도 환경 전체"""
    bank: BankConfig = Field(default_factory=BankConfig)
    central_bank: CentralBankConfig = Field(default_factory=CentralBankConfig)
    rental: RentalConfig = Field(default_factory=RentalConfig)
    policy_timeline: list[PolicyEvent] = Field(default_factory=list)


class SimulationConfig(BaseModel):
    """시뮬레이션 마스터 설정"""
    name: str = "default"
    num_households: int = 10000
    num_steps: int = 120
    seed: int = 42
    reference_households: Optional[int] = 26_700_000  # 승인건수 환산 기준 가구 수


class ScenarioConfig(BaseModel):
    """최상위 시나리오 설정 (모든 것을 통합)"""
    simulation: SimulationConfig = Field(default_factory=SimulationConfig)
    institutions: InstitutionsConfig = Field(default_factory=InstitutionsConfig)
    agents: PopulationConfig = Field(default_factory=PopulationConfig)
