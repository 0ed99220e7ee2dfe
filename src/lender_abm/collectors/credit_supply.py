"""대출 공급 통계 수집기 (은행의 대출 실행 보고 수신)"""

from dataclasses import dataclass, field

import numpy as np

from ..core.types import BorrowerClass


@dataclass
class CreditMonth:
    """한 달 신규 대출 집계"""
    n_approved: int = 0
    n_ftb: int = 0
    n_btl: int = 0
    new_oo_credit: float = 0.0
    new_btl_credit: float = 0.0
    oo_lti: list = field(default_factory=list)
    oo_ltv: list = field(default_factory=list)
    btl_ltv: list = field(default_factory=list)

    @property
    def new_credit(self) -> float:
        return self.new_oo_credit + self.new_btl_credit


class CreditSupply:
    """신규 대출 통계"""

    def __init__(self):
        self.current = CreditMonth()
        self.last = CreditMonth()
        self.total_oo_credit = 0.0      # 미상환 자가거주 대출 잔액
        self.total_btl_credit = 0.0     # 미상환 임대투자 대출 잔액
        self.net_credit_growth = 0.0

    def record_loan(self, borrower, approval):
        """은행이 대출 실행 때마다 호출"""
        m = self.current
        m.n_approved += 1
        kind = BorrowerClass.of(borrower.is_first_time_buyer, not approval.is_buy_to_let)
        if kind == BorrowerClass.BUY_TO_LET:
            m.n_btl += 1
            m.new_btl_credit += approval.principal
            m.btl_ltv.append(approval.loan_to_value)
        else:
            if kind == BorrowerClass.FIRST_TIME_BUYER:
                m.n_ftb += 1
            m.new_oo_credit += approval.principal
            m.oo_ltv.append(approval.loan_to_value)
            m.oo_lti.append(approval.loan_to_income(borrower.annual_gross_employment_income))

    def step(self, ledger=None):
        """월 마감: 증가율 계산, 잔액 갱신, 새 달 시작"""
        prev = self.last.new_credit
        cur = self.current.new_credit
        self.net_credit_growth = (cur - prev) / prev if prev > 0 else 0.0
        if ledger is not None:
            self.total_oo_credit = ledger.total_principal(buy_to_let=False)
            self.total_btl_credit = ledger.total_principal(buy_to_let=True)
        self.last = self.current
        self.current = CreditMonth()

    # ----- 조회 (직전 마감 월 기준) -----

    def get_oo_lti(self) -> np.ndarray:
        return np.asarray(self.last.oo_lti, dtype=np.float64)

    def get_oo_ltv(self) -> np.ndarray:
        return np.asarray(self.last.oo_ltv, dtype=np.float64)

    def get_btl_ltv(self) -> np.ndarray:
        return np.asarray(self.last.btl_ltv, dtype=np.float64)

    def get_n_approved_mortgages(self) -> int:
        return self.last.n_approved

    def get_n_ftb_mortgages(self) -> int:
        return self.last.n_ftb

    def get_n_btl_mortgages(self) -> int:
        return self.last.n_btl

    def get_net_credit_growth(self) -> float:
        return self.net_credit_growth

    def reset(self):
        self.current = CreditMonth()
        self.last = CreditMonth()
        self.total_oo_credit = 0.0
        self.total_btl_credit = 0.0
        self.net_credit_growth = 0.0
