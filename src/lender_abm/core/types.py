"""공통 타입 및 열거형"""

from enum import IntEnum


class BorrowerClass(IntEnum):
    FIRST_TIME_BUYER = 0   # 생애최초 구입자
    HOME_MOVER = 1         # 기존 자가 보유자 (갈아타기)
    BUY_TO_LET = 2         # 임대 투자자

    @classmethod
    def of(cls, is_first_time_buyer: bool, is_home: bool) -> "BorrowerClass":
        if not is_home:
            return cls.BUY_TO_LET
        if is_first_time_buyer:
            return cls.FIRST_TIME_BUYER
        return cls.HOME_MOVER


MONTHS_IN_YEAR = 12
