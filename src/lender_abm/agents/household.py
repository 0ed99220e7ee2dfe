"""차입자 스냅샷 인터페이스"""

from dataclasses import dataclass
from typing import Protocol


class Borrower(Protocol):
    """은행이 심사 시점에 읽는 값 (읽기 전용)"""
    id: int
    bank_balance: float
    monthly_net_employment_income: float
    annual_gross_employment_income: float
    is_first_time_buyer: bool


@dataclass(eq=False)
class Household:
    """가구 1개 (Borrower 구현)"""
    id: int
    bank_balance: float = 0.0                  # 유동자산
    monthly_gross_income: float = 0.0          # 월 총 근로소득
    net_income_ratio: float = 0.75
    is_first_time_buyer: bool = True
    is_investor: bool = False
    n_mortgages: int = 0

    @property
    def monthly_net_employment_income(self) -> float:
        return self.monthly_gross_income * self.net_income_ratio

    @property
    def annual_gross_employment_income(self) -> float:
        return self.monthly_gross_income * 12.0
