"""
QueuedNotifierObserver 테스트

큐 적재, 오버플로 폐기, 비동기 전송 검증.
"""

import pytest

from adapters.mock.notifier import MockNotifier
from adapters.queue.observer import QueuedNotifierObserver
from core.domain.events import LedgerEvent
from core.ledger.token_ledger import TokenLedger


class TestQueuedNotifierObserver:
    """QueuedNotifierObserver 테스트"""

    @pytest.fixture
    def notifier(self) -> MockNotifier:
        return MockNotifier()

    def test_invalid_max_size(self, notifier: MockNotifier) -> None:
        """max_size는 1 이상"""
        with pytest.raises(ValueError):
            QueuedNotifierObserver(notifier, max_size=0)

    def test_notify_only_enqueues(self, notifier: MockNotifier) -> None:
        """notify는 전송하지 않고 적재만"""
        observer = QueuedNotifierObserver(notifier)

        observer.notify(LedgerEvent.mint(1, "user1", 10))

        assert observer.pending_count == 1
        assert notifier.notifications == []

    def test_overflow_drops_oldest(self, notifier: MockNotifier, caplog) -> None:
        """큐가 가득 차면 가장 오래된 이벤트 폐기"""
        observer = QueuedNotifierObserver(notifier, max_size=2)

        for seq in (1, 2, 3):
            observer.notify(LedgerEvent.mint(seq, "user1", seq))

        assert [e.seq for e in observer.pending()] == [2, 3]
        assert observer.dropped_count == 1
        assert "가장 오래된 이벤트 폐기" in caplog.text

    @pytest.mark.asyncio
    async def test_flush_delivers_in_order(self, notifier: MockNotifier) -> None:
        """flush 시 순서대로 전송"""
        observer = QueuedNotifierObserver(notifier)
        observer.notify(LedgerEvent.transfer(1, "owner", "user1", 200))
        observer.notify(LedgerEvent.burn(2, "owner", 100))

        delivered = await observer.flush()

        assert delivered == 2
        assert observer.pending_count == 0
        assert [n.message for n in notifier.notifications] == [
            "[Transfer] from=owner to=user1 amount=200",
            "[Burn] owner=owner amount=100",
        ]

    @pytest.mark.asyncio
    async def test_flush_counts_failures(self) -> None:
        """전송 실패는 카운트 후 폐기"""
        notifier = MockNotifier(should_fail=True)
        observer = QueuedNotifierObserver(notifier)
        observer.notify(LedgerEvent.mint(1, "user1", 10))

        delivered = await observer.flush()

        assert delivered == 0
        assert observer.failed_count == 1
        assert observer.pending_count == 0

    @pytest.mark.asyncio
    async def test_flush_empty(self, notifier: MockNotifier) -> None:
        """빈 큐 flush"""
        observer = QueuedNotifierObserver(notifier)

        assert await observer.flush() == 0

    @pytest.mark.asyncio
    async def test_ledger_integration(self, notifier: MockNotifier) -> None:
        """Ledger 연산 → 큐 → Notifier"""
        observer = QueuedNotifierObserver(notifier)
        ledger = TokenLedger("Spawn Token", "SPN", 1000, observers=[observer])

        ledger.approve("owner", "user1", 100)
        ledger.transfer_from("owner", "user1", "user2", 50)

        assert observer.pending_count == 3
        assert await observer.flush() == 3
        assert notifier.notifications[-1].message == "[Approval] owner=owner spender=user1 amount=50"
