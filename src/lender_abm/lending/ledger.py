"""신용 장부 - 은행이 보유한 미상환 대출 계약 집합"""

from typing import Iterator

from .mortgage import MortgageAgreement


class CreditLedger:
    """미상환 계약 장부 (실행 순서 유지)

    실행 커밋(add)과 계약 종료(remove)만 장부를 바꾼다.
    순회 순서가 실행 순서와 같아서 같은 시드면 종료 추첨 결과도 같다.
    """

    def __init__(self):
        self._mortgages: dict[MortgageAgreement, None] = {}

    def add(self, mortgage: MortgageAgreement):
        self._mortgages[mortgage] = None

    def remove(self, mortgage: MortgageAgreement) -> bool:
        """계약 종료 (매도, 부도, 완제). 장부에 없던 계약이면 False"""
        if mortgage in self._mortgages:
            del self._mortgages[mortgage]
            return True
        return False

    def clear(self):
        self._mortgages.clear()

    def __len__(self) -> int:
        return len(self._mortgages)

    def __contains__(self, mortgage) -> bool:
        return mortgage in self._mortgages

    def __iter__(self) -> Iterator[MortgageAgreement]:
        return iter(list(self._mortgages))

    def total_principal(self, buy_to_let: bool | None = None) -> float:
        """미상환 원금 합계 (buy_to_let=None 이면 전체)"""
        return sum(
            m.principal for m in self._mortgages
            if buy_to_let is None or m.is_buy_to_let == buy_to_let
        )

    def count(self, buy_to_let: bool | None = None) -> int:
        if buy_to_let is None:
            return len(self._mortgages)
        return sum(1 for m in self._mortgages if m.is_buy_to_let == buy_to_let)
