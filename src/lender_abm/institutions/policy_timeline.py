"""정책 타임라인 - 월별 정책 변경 예약"""

from ..core.events import POLICY_PREFIX, EventBus, PolicyChange


class PolicyTimeline:
    """예약된 정책 변경을 해당 월에 EventBus 로 발행

    같은 달에 예약된 변경은 설정 파일에 적힌 순서를 지킨다.
    """

    def __init__(self, schedule: list, event_bus: EventBus):
        """schedule: list[PolicyEvent]"""
        self.schedule = sorted(schedule, key=lambda e: e.month)
        self.event_bus = event_bus
        self._cursor = 0

    @property
    def upcoming(self) -> list:
        return self.schedule[self._cursor:]

    def due(self, current_month: int) -> list:
        """아직 발행되지 않았고 current_month 이전에 예약된 변경"""
        end = self._cursor
        while end < len(self.schedule) and self.schedule[end].month <= current_month:
            end += 1
        return self.schedule[self._cursor:end]

    def check(self, current_month: int) -> int:
        """due 변경 발행, 발행 건수 반환"""
        due = self.due(current_month)
        for item in due:
            self.event_bus.publish(PolicyChange(
                type=POLICY_PREFIX + item.type,
                month=current_month,
                data=dict(item.params),
            ))
        self._cursor += len(due)
        return len(due)

    def reset(self):
        self._cursor = 0
