"""시뮬레이션 페이즈 정의"""

from enum import IntEnum


class Phase(IntEnum):
    """시뮬레이션 단계 (매월 순서대로 실행)"""
    POLICY_CHECK = 0           # 정책 타임라인 체크
    EVENT_PROCESS = 1          # 정책 이벤트 적용
    BANK_STEP = 2              # 금리 재계산 + 월간 카운터 리셋 (심사 전)
    RENTAL_UPDATE = 3          # 기대 임대수익률 갱신
    INCOME_DISTRIBUTION = 4    # 월 저축
    MORTGAGE_DEMAND = 5        # 대출 신청/심사/실행
    MORTGAGE_TERMINATION = 6   # 계약 종료 (매도/완제)
    CREDIT_STATS = 7           # 대출 통계 월 마감
    RECORD_STATS = 8           # 통계 기록


DEFAULT_PHASE_ORDER = list(Phase)
