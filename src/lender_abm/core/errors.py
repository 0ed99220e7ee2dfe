"""대출 심사 예외 계층

업무상 거절(원금 0)은 예외가 아니다. 호출자는 ``MortgageAgreement.is_void`` 로
확인한다. 여기 정의된 예외는 잘못된 요청이나 모델 결함을 뜻한다.

    LenderError
    ├── InvalidRequestError      주택가격 <= 0 등 잘못된 요청
    │   └── StaleQuoteError      심사 이후 은행 상태가 바뀐 조회 결과를 실행
    ├── ConfigError              프리셋/설정 오류
    └── InvariantViolation       치명적 불변식 위반 (상류 제약 조합의 결함)
        ├── DownPaymentExceedsWealthError
        └── InvestorLoanToIncomeError

모든 예외는 기계 판독용 ``code`` 를 가진다.
"""


class LenderError(Exception):
    """대출 모델 예외 기본 클래스"""

    code: str = "LENDER_ERROR"


class InvalidRequestError(LenderError, ValueError):
    """잘못된 대출 요청"""

    code: str = "INVALID_REQUEST"


class StaleQuoteError(InvalidRequestError):
    """조회 이후 금리/카운터가 바뀐 계약을 실행하려 함"""

    code: str = "STALE_QUOTE"

    def __init__(self, quoted_version, current_version):
        self.quoted_version = quoted_version
        self.current_version = current_version
        super().__init__(
            f"Agreement was quoted against bank state {quoted_version}, "
            f"current state is {current_version}; request a new quote"
        )


class ConfigError(LenderError):
    """설정 파일 로드/검증 실패"""

    code: str = "CONFIG_ERROR"


class InvariantViolation(LenderError):
    """치명적 불변식 위반 - 잡아서 무시하면 안 됨"""

    code: str = "INVARIANT_VIOLATION"


class DownPaymentExceedsWealthError(InvariantViolation):
    """계약금이 차입자의 유동자산을 초과"""

    code: str = "DOWN_PAYMENT_EXCEEDS_WEALTH"

    def __init__(self, down_payment: float, liquid_wealth: float, borrower_id=None):
        self.down_payment = down_payment
        self.liquid_wealth = liquid_wealth
        self.borrower_id = borrower_id
        super().__init__(
            f"Down-payment larger than household's bank balance: "
            f"down_payment={down_payment}, bank_balance={liquid_wealth}, "
            f"borrower={borrower_id}"
        )


class InvestorLoanToIncomeError(InvariantViolation):
    """임대 투자자(BTL) 대출에 LTI 한도를 요청"""

    code: str = "INVESTOR_LTI_REQUEST"

    def __init__(self, borrower_id=None):
        self.borrower_id = borrower_id
        super().__init__(
            f"Loan-to-income limit requested for a buy-to-let investor "
            f"(borrower={borrower_id})"
        )
