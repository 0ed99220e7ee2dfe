"""중앙은행 - 기준금리 및 거시건전성 규제 값 제공"""

from dataclasses import dataclass

from ..core.errors import InvestorLoanToIncomeError


@dataclass
class CentralBankState:
    base_rate: float = 0.005
    max_ftb_lti: float = 4.5
    max_oo_lti: float = 4.5
    max_fraction_oo_over_lti: float = 0.15
    btl_icr_limit: float = 1.25
    affordability_coefficient: float = 0.5


class CentralBank:
    """정책 원천 (Policy Source)

    중앙은행 자체의 정책 결정 로직은 다루지 않는다. 은행이 읽는 값과
    정책 이벤트가 바꾸는 setter만 제공한다.
    """

    def __init__(self, cfg):
        """cfg: CentralBankConfig"""
        self.cfg = cfg
        self.reset()

    @property
    def base_rate(self) -> float:
        return self.state.base_rate

    @property
    def affordability_coefficient(self) -> float:
        return self.state.affordability_coefficient

    def get_base_rate(self) -> float:
        return self.state.base_rate

    def get_loan_to_income_limit(self, is_first_time_buyer: bool, is_home: bool) -> float:
        """규제 LTI 상한 (soft). 임대투자 대출에는 LTI 규제가 없다"""
        if not is_home:
            raise InvestorLoanToIncomeError()
        if is_first_time_buyer:
            return self.state.max_ftb_lti
        return self.state.max_oo_lti

    def get_interest_cover_ratio_limit(self, is_home: bool) -> float:
        """임대수익/이자비용 최소 배수. 자가거주 대출에는 적용하지 않음 (0)"""
        if is_home:
            return 0.0
        return self.state.btl_icr_limit

    def get_max_fraction_oo_mortgages_over_lti_limit(self) -> float:
        return self.state.max_fraction_oo_over_lti

    # ----- 정책 변경 -----

    def set_base_rate(self, rate: float):
        self.state.base_rate = rate

    def set_loan_to_income_limits(self, ftb: float = None, oo: float = None):
        if ftb is not None:
            self.state.max_ftb_lti = ftb
        if oo is not None:
            self.state.max_oo_lti = oo

    def set_max_fraction_oo_over_lti(self, fraction: float):
        self.state.max_fraction_oo_over_lti = fraction

    def set_interest_cover_ratio_limit(self, icr: float):
        self.state.btl_icr_limit = icr

    def reset(self):
        cfg = self.cfg
        self.state = CentralBankState(
            base_rate=cfg.base_rate,
            max_ftb_lti=cfg.max_ftb_lti,
            max_oo_lti=cfg.max_oo_lti,
            max_fraction_oo_over_lti=cfg.max_fraction_oo_over_lti,
            btl_icr_limit=cfg.btl_icr_limit,
            affordability_coefficient=cfg.affordability_coefficient,
        )
