"""정책 변경 전달 - 월초에 예약된 변경을 모아 두었다가 한 번에 적용"""

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Callable

POLICY_PREFIX = "policy."
ANY = "*"


@dataclass(frozen=True)
class PolicyChange:
    """적용 대기 중인 정책 변경 한 건"""
    type: str          # "policy.set_base_rate" 등
    month: int         # 적용되는 시뮬레이션 월
    data: dict = field(default_factory=dict)

    @property
    def name(self) -> str:
        return self.type[len(POLICY_PREFIX):] if self.type.startswith(POLICY_PREFIX) else self.type


Handler = Callable[[PolicyChange], None]


class EventBus:
    """정책 변경 큐

    publish 는 쌓기만 하고, process 가 호출될 때 등록 순서대로 핸들러에 전달.
    심사 도중에 한도가 바뀌지 않도록 적용 시점은 월 단위 페이즈로 고정한다.
    """

    def __init__(self):
        self._handlers: dict[str, list[Handler]] = defaultdict(list)
        self._pending: list[PolicyChange] = []
        self.applied: list[PolicyChange] = []

    def subscribe(self, event_type: str, handler: Handler):
        self._handlers[event_type].append(handler)

    def publish(self, change: PolicyChange):
        self._pending.append(change)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def process(self) -> list[PolicyChange]:
        """대기 중인 변경 적용. 적용한 변경 목록 반환"""
        batch, self._pending = self._pending, []
        for change in batch:
            for handler in self._handlers.get(change.type, ()):
                handler(change)
            for handler in self._handlers.get(ANY, ()):
                handler(change)
        self.applied.extend(batch)
        return batch

    def clear(self):
        self._pending = []
        self._handlers.clear()
        self.applied = []
