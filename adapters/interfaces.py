"""
어댑터 인터페이스 정의

Protocol 기반으로 정의하여 의존성 주입 및 Mock 교체 가능.
모든 구현체는 이 Protocol을 준수해야 함.
"""

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from core.domain.events import LedgerEvent


@runtime_checkable
class ILedgerObserver(Protocol):
    """Ledger 알림 싱크 인터페이스

    Ledger가 상태 변경을 커밋한 직후 동기적으로 호출.
    불변 이벤트만 전달되며 Ledger 핸들은 전달되지 않는다.

    구현 시 주의:
    - 빠르게 반환해야 함 (블로킹 I/O 금지)
    - 예외를 던져도 커밋된 변경은 롤백되지 않음
    - 알림 처리 중 Ledger 변경 호출 금지 (ReentrantCallError)
    """

    def notify(self, event: "LedgerEvent") -> None:
        """이벤트 수신

        Args:
            event: 커밋된 상태 변경 이벤트
        """
        ...


@runtime_checkable
class INotifier(Protocol):
    """알림 서비스 인터페이스

    Ledger 이벤트, 에러 알림 등을 외부 서비스로 전송.
    """

    async def send(
        self,
        message: str,
        level: str = "INFO",
        extra: dict[str, Any] | None = None,
    ) -> bool:
        """알림 전송

        Args:
            message: 알림 메시지
            level: 알림 레벨 (INFO, WARNING, ERROR, CRITICAL)
            extra: 추가 데이터 (선택)

        Returns:
            전송 성공 여부
        """
        ...

    async def send_ledger_alert(self, event: "LedgerEvent") -> bool:
        """Ledger 이벤트 알림 전송 (포맷팅된 메시지)

        Args:
            event: Ledger 이벤트

        Returns:
            전송 성공 여부
        """
        ...

    async def close(self) -> None:
        """리소스 정리"""
        ...
