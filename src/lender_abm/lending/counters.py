"""월간 대출 카운터 (정책 장부)"""

from dataclasses import dataclass


@dataclass
class MonthlyCounters:
    """이번 달 대출 실적

    단일 작성자: 금리 조정기(RateController)가 매월 초 reset, 은행의 실행 커밋만
    증가시킨다. LTI 초과 비율은 같은 달 안에서 심사 순서에 따라 달라진다.
    """
    supply_val: float = 0.0          # 이번 달 실행된 대출 원금 합계
    n_oo_mortgages: int = 0          # 자가거주 대출 건수
    n_oo_over_lti: int = 0           # 그 중 규제 LTI 상한 초과 건수

    def reset(self):
        self.supply_val = 0.0
        self.n_oo_mortgages = 0
        self.n_oo_over_lti = 0

    def over_lti_fraction(self) -> float:
        """라플라스 평활된 LTI 초과 비율 (n+1)/(N+1)

        월초 0 나눗셈과 첫 대출에 대한 과잉 반응을 막는다.
        """
        return (self.n_oo_over_lti + 1.0) / (self.n_oo_mortgages + 1.0)
