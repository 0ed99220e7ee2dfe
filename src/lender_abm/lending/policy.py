"""은행 내부 심사 기준 (LTV/LTI) 및 규제 LTI 오버라이드"""

from dataclasses import dataclass

from ..core.errors import InvestorLoanToIncomeError
from .counters import MonthlyCounters


def effective_lti_limit(bank_limit: float, regulator_limit: float,
                        counters: MonthlyCounters, max_fraction: float) -> float:
    """실효 LTI 상한

    은행 자체 상한(hard)은 항상 적용. 이번 달 자가거주 대출 중 규제 상한을
    넘은 비율(평활)이 허용치를 넘으면 규제 상한(soft)과 비교해 작은 쪽을 쓴다.
    """
    if counters.over_lti_fraction() > max_fraction:
        return min(bank_limit, regulator_limit)
    return bank_limit


@dataclass
class BankPolicy:
    """은행 자체 심사 한도"""
    ftb_ltv: float = 0.95
    oo_ltv: float = 0.90
    btl_ltv: float = 0.80
    ftb_lti: float = 6.0
    oo_lti: float = 6.0

    @classmethod
    def from_config(cls, cfg) -> "BankPolicy":
        """cfg: BankConfig"""
        return cls(
            ftb_ltv=cfg.max_ftb_ltv,
            oo_ltv=cfg.max_oo_ltv,
            btl_ltv=cfg.max_btl_ltv,
            ftb_lti=cfg.max_ftb_lti,
            oo_lti=cfg.max_oo_lti,
        )

    def loan_to_value_limit(self, is_first_time_buyer: bool, is_home: bool) -> float:
        if is_home:
            return self.ftb_ltv if is_first_time_buyer else self.oo_ltv
        return self.btl_ltv

    def loan_to_income_limit(self, is_first_time_buyer: bool, is_home: bool,
                             borrower_id=None) -> float:
        """은행 자체 LTI 상한 (hard)"""
        if not is_home:
            raise InvestorLoanToIncomeError(borrower_id)
        return self.ftb_lti if is_first_time_buyer else self.oo_lti

    def set_ltv_limits(self, ftb: float = None, oo: float = None, btl: float = None):
        if ftb is not None:
            self.ftb_ltv = ftb
        if oo is not None:
            self.oo_ltv = oo
        if btl is not None:
            self.btl_ltv = btl

    def set_lti_limits(self, ftb: float = None, oo: float = None):
        if ftb is not None:
            self.ftb_lti = ftb
        if oo is not None:
            self.oo_lti = oo
