"""
Mock Ledger Observer

테스트용 이벤트 기록기.
ILedgerObserver Protocol 준수.
"""

from typing import Callable

from core.domain.events import LedgerEvent
from core.types import LedgerEventType


class RecordingObserver:
    """이벤트 기록 Observer

    ILedgerObserver Protocol 구현.
    수신한 모든 이벤트를 기록하여 테스트에서 검증 가능.

    사용 예시:
    ```python
    observer = RecordingObserver()
    ledger = TokenLedger("Spawn Token", "SPN", 1000, observers=[observer])

    ledger.transfer("owner", "user1", 200)

    assert observer.event_names == ["Transfer"]
    ```
    """

    def __init__(
        self,
        should_fail: bool = False,
        on_event: Callable[[LedgerEvent], None] | None = None,
    ):
        """
        Args:
            should_fail: True면 기록 후 예외 발생 (Observer 실패 시나리오 테스트용)
            on_event: 기록 후 호출할 콜백 (재진입 시나리오 테스트용)
        """
        self.should_fail = should_fail
        self.on_event = on_event
        self.events: list[LedgerEvent] = []

    def notify(self, event: LedgerEvent) -> None:
        """이벤트 기록"""
        self.events.append(event)

        if self.on_event is not None:
            self.on_event(event)

        if self.should_fail:
            raise RuntimeError(f"RecordingObserver 강제 실패: {event.name}")

    # -------------------------------------------------------------------------
    # 테스트 헬퍼 메서드
    # -------------------------------------------------------------------------

    def clear(self) -> None:
        """기록 초기화"""
        self.events.clear()

    def get_by_type(self, event_type: LedgerEventType) -> list[LedgerEvent]:
        """특정 타입의 이벤트 조회"""
        return [e for e in self.events if e.event_type == event_type]

    @property
    def event_names(self) -> list[str]:
        """수신 순서대로 이벤트 이름 목록"""
        return [e.name for e in self.events]

    @property
    def notifications(self) -> list[tuple[str, str]]:
        """(event_name, detail_string) 목록"""
        return [e.as_notification() for e in self.events]

    @property
    def last_event(self) -> LedgerEvent | None:
        """마지막 이벤트 조회"""
        return self.events[-1] if self.events else None
