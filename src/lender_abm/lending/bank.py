"""은행 (주택담보대출 기관)

대출 승인/거절만 하는 대출기관. 대출 정책은 모두 여기 모인다.

- 금리: RateController 가 매월 수요 피드백으로 조정
- 심사: underwriting.underwrite (순수 계산) + commit (장부/카운터 기록)
- 규제 LTI: 이번 달 초과 비율에 따라 중앙은행 soft 상한 적용
"""

import logging

from ..core.errors import StaleQuoteError
from .counters import MonthlyCounters
from .ledger import CreditLedger
from .mortgage import MortgageAgreement
from .policy import BankPolicy, effective_lti_limit
from .rate import RateController
from .underwriting import UnderwritingTerms, max_mortgage_price, underwrite

logger = logging.getLogger(__name__)


class Bank:
    """대출기관"""

    def __init__(self, cfg, central_bank, rental_stats, credit_supply=None):
        """
        Args:
            cfg: BankConfig
            central_bank: CentralBank (정책 원천)
            rental_stats: RentalMarketStats (기대 임대수익률)
            credit_supply: CreditSupply (대출 통계 수집기, 선택)
        """
        self.cfg = cfg
        self.central_bank = central_bank
        self.rental_stats = rental_stats
        self.credit_supply = credit_supply

        self.mortgages = CreditLedger()
        self.counters = MonthlyCounters()
        self.rates = RateController(cfg, central_bank, self.counters)
        self.policy = BankPolicy.from_config(cfg)
        # 금리 재계산/실행마다 증가. 조회 결과가 실행 시점에도 유효한지 판별
        self._state_version = 0

    def init(self):
        """장부/금리/내부 한도 초기화 (중앙은행이 먼저 초기화되어 있어야 함)"""
        self.mortgages.clear()
        self.rates.init()
        self.policy = BankPolicy.from_config(self.cfg)
        self._state_version += 1

    def step(self, total_population: int) -> float:
        """월간 금리 재계산 + 카운터 리셋. 그 달의 어떤 심사보다 먼저 호출"""
        rate = self.rates.step(total_population)
        self._state_version += 1
        return rate

    # ----- 금리 -----

    @property
    def mortgage_interest_rate(self) -> float:
        return self.rates.mortgage_interest_rate

    @property
    def interest_spread(self) -> float:
        return self.rates.interest_spread

    @property
    def supply_target(self) -> float:
        return self.rates.supply_target

    @property
    def supply_val(self) -> float:
        return self.counters.supply_val

    # ----- 한도 -----

    def get_loan_to_value_limit(self, is_first_time_buyer: bool, is_home: bool) -> float:
        return self.policy.loan_to_value_limit(is_first_time_buyer, is_home)

    def get_loan_to_income_limit(self, is_first_time_buyer: bool, is_home: bool,
                                 borrower_id=None) -> float:
        """실효 LTI 상한. 은행 자체 상한(hard) + 조건부 중앙은행 상한(soft)"""
        limit = self.policy.loan_to_income_limit(is_first_time_buyer, is_home, borrower_id)
        return effective_lti_limit(
            limit,
            self.central_bank.get_loan_to_income_limit(is_first_time_buyer, is_home),
            self.counters,
            self.central_bank.get_max_fraction_oo_mortgages_over_lti_limit(),
        )

    def terms_for(self, borrower, is_home: bool) -> UnderwritingTerms:
        """현재 은행 상태에서 이 차입자에게 적용할 심사 수치"""
        ftb = borrower.is_first_time_buyer
        return UnderwritingTerms(
            ltv_limit=self.get_loan_to_value_limit(ftb, is_home),
            lti_limit=(
                self.get_loan_to_income_limit(ftb, True, getattr(borrower, 'id', None))
                if is_home else None
            ),
            icr_limit=self.central_bank.get_interest_cover_ratio_limit(is_home),
            affordability_coefficient=self.central_bank.affordability_coefficient,
            payment_factor=self.rates.monthly_payment_factor(is_home),
            mortgage_rate=self.mortgage_interest_rate,
            n_payments=self.rates.n_payments,
            flow_yield=0.0 if is_home else self.rental_stats.get_exp_av_flow_yield(),
        )

    # ----- 심사 -----

    def request_approval(self, borrower, house_price: float, desired_down_payment: float,
                         is_home: bool) -> MortgageAgreement:
        """조회(quote): 계약 조건만 계산. 장부/통계/카운터 변경 없음"""
        approval = underwrite(borrower, house_price, desired_down_payment, is_home,
                              self.terms_for(borrower, is_home))
        approval.quote_version = self._state_version
        return approval

    def request_loan(self, borrower, house_price: float, desired_down_payment: float,
                     is_home: bool) -> MortgageAgreement:
        """실행(originate): 조회 후 바로 commit"""
        approval = self.request_approval(borrower, house_price, desired_down_payment, is_home)
        self.commit(approval)
        return approval

    def commit(self, approval: MortgageAgreement):
        """승인된 계약을 장부/월간 카운터/통계에 기록

        조회 이후 금리 재계산이나 다른 실행이 있었다면 한도가 달라졌을 수 있으므로
        StaleQuoteError. 조회와 실행을 한 번에 하려면 request_loan 을 쓴다.
        """
        if approval.quote_version != self._state_version:
            raise StaleQuoteError(approval.quote_version, self._state_version)
        self._state_version += 1
        self.counters.supply_val += approval.principal
        if approval.principal <= 0.0:
            return
        self.mortgages.add(approval)
        self._report(approval)
        if not approval.is_buy_to_let:
            h = approval.borrower
            self.counters.n_oo_mortgages += 1
            regulator_lti = self.central_bank.get_loan_to_income_limit(h.is_first_time_buyer, True)
            if approval.loan_to_income(h.annual_gross_employment_income) > regulator_lti:
                self.counters.n_oo_over_lti += 1
        logger.debug(
            "originated %s mortgage: principal=%.2f down_payment=%.2f",
            "btl" if approval.is_buy_to_let else "oo", approval.principal, approval.down_payment,
        )

    def _report(self, approval: MortgageAgreement):
        if self.credit_supply is None:
            return
        try:
            self.credit_supply.record_loan(approval.borrower, approval)
        except Exception:
            # 통계 수집 실패로 대출 실행을 되돌리지 않는다
            logger.warning("credit supply recording failed", exc_info=True)

    def get_max_mortgage_price(self, borrower, is_home: bool) -> float:
        """승인 가능한 최고 주택가격"""
        return max_mortgage_price(borrower, is_home, self.terms_for(borrower, is_home))

    def end_mortgage_contract(self, mortgage: MortgageAgreement) -> bool:
        """계약 종료 (매도/부도/완제)"""
        return self.mortgages.remove(mortgage)
