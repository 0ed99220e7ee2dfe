"""대출 심사 엔진 - 순수 계산

LTV → (자가거주) DSR형 상환능력 → LTI / (임대투자) ICR 순서로 원금 상한을
깎아 내려간다. 뒤 단계는 원금을 줄이기만 하고 늘리지 않는다.
은행 상태(장부, 카운터)는 건드리지 않으므로 조회/실행 양쪽에서 같이 쓴다.
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional

from ..core.errors import DownPaymentExceedsWealthError, InvalidRequestError
from ..core.types import MONTHS_IN_YEAR
from .mortgage import MortgageAgreement

logger = logging.getLogger(__name__)

# 반올림 오차로 계약금이 잔고를 넘지 않도록 남겨두는 여유 (1센트)
WEALTH_SAFETY_MARGIN = 0.01


@dataclass(frozen=True)
class UnderwritingTerms:
    """심사 1건에 필요한 모든 수치 (은행이 요청 시점에 확정)"""
    ltv_limit: float
    lti_limit: Optional[float]          # 임대투자는 None
    icr_limit: float                    # 자가거주는 0
    affordability_coefficient: float
    payment_factor: float               # 월상환액 / 원금
    mortgage_rate: float                # 연 금리
    n_payments: int
    flow_yield: float = 0.0             # 기대 임대수익률 (임대투자만 사용)

    @property
    def monthly_interest_rate(self) -> float:
        return self.mortgage_rate / MONTHS_IN_YEAR

    @property
    def required_yield(self) -> float:
        """ICR 상한을 맞추기 위한 임대수익률 / 원금비율 분모"""
        return self.icr_limit * self.mortgage_rate


def affordable_principal(borrower, terms: UnderwritingTerms) -> float:
    """월상환액 <= 계수 × 월순소득 을 만족하는 최대 원금"""
    return terms.affordability_coefficient * borrower.monthly_net_employment_income / terms.payment_factor


def icr_principal(house_price: float, terms: UnderwritingTerms) -> float:
    """기대 임대수익이 이자비용의 ICR 배 이상이 되는 최대 원금"""
    if terms.required_yield <= 0.0:
        return math.inf
    return terms.flow_yield * house_price / terms.required_yield


def underwrite(borrower, house_price: float, desired_down_payment: float,
               is_home: bool, terms: UnderwritingTerms) -> MortgageAgreement:
    """대출 조건 산출

    Args:
        borrower: Borrower (잔고, 월순소득, 연총소득, 생애최초 여부)
        house_price: 주택 가격 (> 0)
        desired_down_payment: 희망 계약금
        is_home: True = 자가거주, False = 임대투자(BTL)
        terms: 요청 시점의 심사 수치

    Returns:
        MortgageAgreement (원금 0 이면 대출 불가)

    Raises:
        InvalidRequestError: house_price <= 0
        DownPaymentExceedsWealthError: 계약금이 유동자산 초과 (모델 결함)
    """
    if not house_price > 0.0:
        raise InvalidRequestError(f"house_price must be positive, got {house_price}")

    approval = MortgageAgreement(borrower=borrower, is_buy_to_let=not is_home)

    # 1. LTV
    principal = house_price * terms.ltv_limit

    if is_home:
        # 2a. 상환능력
        principal = min(principal, affordable_principal(borrower, terms))
        # 2b. LTI
        principal = min(principal, borrower.annual_gross_employment_income * terms.lti_limit)
    else:
        # 3. ICR
        principal = min(principal, icr_principal(house_price, terms))

    principal = max(principal, 0.0)

    # 4. 계약금: 최소 계약금에서 시작, 희망액이 더 크면 원금을 줄인다
    down_payment = house_price - principal
    liquid_wealth = borrower.bank_balance
    if desired_down_payment < 0.0:
        desired_down_payment = 0.0
    if desired_down_payment > house_price:
        desired_down_payment = house_price
    if desired_down_payment > liquid_wealth:
        desired_down_payment = liquid_wealth
    if desired_down_payment > down_payment:
        down_payment = desired_down_payment
        principal = house_price - desired_down_payment

    # 5. 나머지 계약 조건
    approval.principal = principal
    approval.down_payment = down_payment
    approval.monthly_payment = principal * terms.payment_factor
    approval.n_payments = terms.n_payments
    approval.monthly_interest_rate = terms.monthly_interest_rate
    approval.purchase_price = principal + down_payment

    # 6. 불변식: 계약금 <= 유동자산
    if approval.down_payment > liquid_wealth:
        borrower_id = getattr(borrower, 'id', None)
        logger.error(
            "down-payment larger than bank balance: down_payment=%.2f bank_balance=%.2f borrower=%s",
            approval.down_payment, liquid_wealth, borrower_id,
        )
        raise DownPaymentExceedsWealthError(approval.down_payment, liquid_wealth, borrower_id)

    return approval


def max_mortgage_price(borrower, is_home: bool, terms: UnderwritingTerms) -> float:
    """은행이 승인할 수 있는 최고 주택가격 (underwrite 의 역산)

    유동자산 전액에서 1센트를 뺀 금액을 최대 계약금으로 본다.
    """
    max_down_payment = borrower.bank_balance - WEALTH_SAFETY_MARGIN

    # LTV: 최대 계약금 + LTV 최대 원금
    if terms.ltv_limit < 1.0:
        max_price = max_down_payment / (1.0 - terms.ltv_limit)
    else:
        max_price = math.inf

    if is_home:
        affordable_max_price = max_down_payment + max(
            0.0, terms.affordability_coefficient * borrower.monthly_net_employment_income
        ) / terms.payment_factor
        lti_max_price = borrower.annual_gross_employment_income * terms.lti_limit + max_down_payment
        max_price = min(max_price, affordable_max_price, lti_max_price)
    else:
        # 임대수익률이 ICR × 금리 이상이면 ICR은 절대 구속하지 않는다
        if terms.required_yield > 0.0 and terms.flow_yield / terms.required_yield < 1.0:
            icr_max_price = max_down_payment / (1.0 - terms.flow_yield / terms.required_yield)
        else:
            icr_max_price = math.inf
        max_price = min(max_price, icr_max_price)

    return max(max_price, 0.0)
