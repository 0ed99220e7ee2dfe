"""주택담보대출 계약"""

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(eq=False)
class MortgageAgreement:
    """대출 계약 1건

    심사 엔진이 생성한다. 실행(originate) 모드에서만 신용 장부에 등록되고,
    조회(quote) 모드 결과는 같은 구조지만 저장/보고되지 않는다.
    ``eq=False``: 장부는 객체 동일성으로 계약을 구분한다.
    """
    borrower: Any = field(repr=False)
    is_buy_to_let: bool = False        # True = 이자만 상환 (임대투자)
    principal: float = 0.0
    down_payment: float = 0.0
    purchase_price: float = 0.0        # principal + down_payment
    monthly_payment: float = 0.0
    monthly_interest_rate: float = 0.0
    n_payments: int = 0
    quote_version: Optional[int] = field(default=None, repr=False)  # 심사 시점 은행 상태

    @property
    def is_void(self) -> bool:
        """원금 0 - 대출 불가 (업무상 거절)"""
        return self.principal <= 0.0

    @property
    def loan_to_value(self) -> float:
        if self.purchase_price <= 0.0:
            return 0.0
        return self.principal / self.purchase_price

    def loan_to_income(self, annual_gross_income: float) -> float:
        if annual_gross_income <= 0.0:
            return float('inf') if self.principal > 0.0 else 0.0
        return self.principal / annual_gross_income

    def same_terms(self, other: "MortgageAgreement") -> bool:
        """차입자/금액/조건이 모두 같은지 (조회 재현성 확인용)"""
        return (
            self.borrower is other.borrower
            and self.is_buy_to_let == other.is_buy_to_let
            and self.principal == other.principal
            and self.down_payment == other.down_payment
            and self.purchase_price == other.purchase_price
            and self.monthly_payment == other.monthly_payment
            and self.monthly_interest_rate == other.monthly_interest_rate
            and self.n_payments == other.n_payments
        )
