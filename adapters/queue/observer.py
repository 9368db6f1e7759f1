"""
큐 기반 알림 Observer

Ledger 알림을 동기적으로 큐에 적재하고, 외부 Notifier 전송은
flush() 호출 시 비동기로 수행 (out-of-band delivery).
ILedgerObserver Protocol 준수.
"""

import logging
from collections import deque

from adapters.interfaces import INotifier
from core.constants import Defaults
from core.domain.events import LedgerEvent

logger = logging.getLogger(__name__)


class QueuedNotifierObserver:
    """큐 적재 Observer

    notify()는 큐 적재만 하므로 Ledger 연산을 블로킹하지 않는다.
    큐가 가득 차면 가장 오래된 이벤트를 버린다.

    사용 예시:
    ```python
    observer = QueuedNotifierObserver(SlackNotifier(webhook_url="..."))
    ledger.subscribe(observer)

    ledger.transfer("owner", "user1", 200)
    delivered = await observer.flush()
    ```

    Args:
        notifier: 실제 전송을 담당할 Notifier
        max_size: 큐 최대 크기
    """

    def __init__(self, notifier: INotifier, max_size: int = Defaults.NOTIFY_QUEUE_SIZE):
        if max_size <= 0:
            raise ValueError("max_size는 1 이상이어야 합니다")

        self.notifier = notifier
        self.max_size = max_size
        self._queue: deque[LedgerEvent] = deque()
        self.dropped_count = 0
        self.failed_count = 0

    def notify(self, event: LedgerEvent) -> None:
        """이벤트 큐 적재"""
        if len(self._queue) >= self.max_size:
            dropped = self._queue.popleft()
            self.dropped_count += 1
            logger.warning(
                "알림 큐 가득 참 (max=%d), 가장 오래된 이벤트 폐기: %s #%d",
                self.max_size,
                dropped.name,
                dropped.seq,
            )
        self._queue.append(event)

    @property
    def pending_count(self) -> int:
        """전송 대기 중인 이벤트 수"""
        return len(self._queue)

    def pending(self) -> list[LedgerEvent]:
        """전송 대기 중인 이벤트 목록 (사본)"""
        return list(self._queue)

    async def flush(self) -> int:
        """대기 중인 이벤트를 모두 전송

        전송 실패한 이벤트는 재시도하지 않고 버린다.

        Returns:
            전송 성공한 이벤트 수
        """
        delivered = 0

        while self._queue:
            event = self._queue.popleft()
            if await self.notifier.send_ledger_alert(event):
                delivered += 1
            else:
                self.failed_count += 1
                logger.warning("Ledger 알림 전송 실패: %s #%d", event.name, event.seq)

        if delivered:
            logger.debug("Ledger 알림 %d건 전송 완료", delivered)

        return delivered
