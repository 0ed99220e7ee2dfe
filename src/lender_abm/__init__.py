"""주택담보대출 은행 ABM

주택시장 ABM 안의 단일 대출기관 모델

주요 구성요소:
- 대출 심사: LTV → 상환능력 → LTI (자가거주) / ICR (임대투자) 순차 제약
- 금리 조정: 목표 대출 공급량 대비 실적의 비례 피드백
- 거시건전성: 중앙은행 LTI soft 상한 (초과 허용 비율, 라플라스 평활)
"""

from .core.errors import (
    LenderError,
    InvalidRequestError,
    ConfigError,
    InvariantViolation,
    DownPaymentExceedsWealthError,
    InvestorLoanToIncomeError,
    StaleQuoteError,
)
from .lending.bank import Bank
from .lending.mortgage import MortgageAgreement
from .lending.underwriting import UnderwritingTerms, underwrite, max_mortgage_price
from .institutions.central_bank import CentralBank
from .markets.rental_market import RentalMarketStats
from .agents.household import Household
from .simulation.engine import SimulationEngine

__all__ = [
    "LenderError",
    "InvalidRequestError",
    "ConfigError",
    "InvariantViolation",
    "DownPaymentExceedsWealthError",
    "InvestorLoanToIncomeError",
    "StaleQuoteError",
    "Bank",
    "MortgageAgreement",
    "UnderwritingTerms",
    "underwrite",
    "max_mortgage_price",
    "CentralBank",
    "RentalMarketStats",
    "Household",
    "SimulationEngine",
]
