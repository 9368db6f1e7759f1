"""
Ledger Runtime Bootstrap

설정 로드, 의존성 주입, 알림 채널 구성.

구성:
- TokenLedger: 토큰 상태 머신
- ConsoleObserver: 항상 등록 (로그 채널)
- QueuedNotifierObserver + SlackNotifier: webhook_url 설정 시에만 등록

실행 방법:
    python -m runtime
"""

import logging
import sys
from pathlib import Path
from typing import Any

from adapters.console.observer import ConsoleObserver
from adapters.interfaces import ILedgerObserver, INotifier
from adapters.queue.observer import QueuedNotifierObserver
from adapters.slack.notifier import SlackNotifier
from core.config.loader import (
    ConfigLoadError,
    LedgerConfig,
    LoggingConfig,
    NotifierConfig,
    Settings,
    get_settings,
)
from core.constants import Defaults
from core.ledger.token_ledger import TokenLedger
from core.logging import setup_logging
from core.types import NotificationLevel

logger = logging.getLogger(__name__)


def create_notifier(config: NotifierConfig) -> INotifier | None:
    """Slack Notifier 생성 (설정이 있는 경우에만)"""
    if not config.slack_enabled:
        logger.info("Slack webhook_url이 설정되지 않아 알림 비활성화")
        return None

    notifier = SlackNotifier(
        webhook_url=config.slack_webhook_url,
        channel=config.slack_channel,
        username=config.slack_username,
    )
    logger.info(f"SlackNotifier 생성 완료 (channel: {config.slack_channel or 'default'})")
    return notifier


class LedgerRuntime:
    """Ledger 실행 환경

    Ledger와 알림 채널을 묶어 생명주기를 관리.

    Args:
        ledger: 토큰 Ledger
        notifier: 외부 Notifier (None이면 외부 알림 없음)
        queue_size: 알림 큐 최대 크기
    """

    def __init__(
        self,
        ledger: TokenLedger,
        notifier: INotifier | None = None,
        queue_size: int = Defaults.NOTIFY_QUEUE_SIZE,
    ):
        self.ledger = ledger
        self.notifier = notifier
        self.console_observer = ConsoleObserver()
        self.queue_observer: QueuedNotifierObserver | None = None

        self.ledger.subscribe(self.console_observer)

        if notifier is not None:
            self.queue_observer = QueuedNotifierObserver(notifier, max_size=queue_size)
            self.ledger.subscribe(self.queue_observer)

    @classmethod
    def from_config(
        cls,
        config: LedgerConfig,
        notifier: INotifier | None = None,
        extra_observers: list[ILedgerObserver] | None = None,
    ) -> "LedgerRuntime":
        """설정으로부터 Runtime 생성

        Args:
            config: 전체 설정
            notifier: Notifier 오버라이드 (None이면 설정에 따라 생성)
            extra_observers: 추가로 등록할 Observer 목록

        Returns:
            LedgerRuntime 인스턴스
        """
        token = config.token
        ledger = TokenLedger(
            token.name,
            token.symbol,
            token.initial_supply,
            token.max_supply,
            owner_account=token.owner_account,
            observers=extra_observers,
        )

        if notifier is None:
            notifier = create_notifier(config.notifier)

        return cls(ledger, notifier=notifier, queue_size=config.notifier.queue_size)

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: Any) -> "LedgerRuntime":
        """Settings 싱글턴으로부터 Runtime 생성"""
        return cls.from_config(settings.config, **kwargs)

    async def flush_notifications(self) -> int:
        """대기 중인 외부 알림 전송

        Returns:
            전송 성공한 알림 수
        """
        if self.queue_observer is None:
            return 0
        return await self.queue_observer.flush()

    async def close(self) -> None:
        """남은 알림 전송 후 Notifier 종료"""
        await self.flush_notifications()

        violations = self.ledger.verify_invariants()
        if violations:
            logger.error(f"Ledger 불변식 위반 감지: {violations}")
            if self.notifier is not None:
                await self.notifier.send(
                    "Ledger 불변식 위반 감지",
                    level=NotificationLevel.ERROR.value,
                    extra={"violations": "; ".join(violations)},
                )

        if self.notifier is not None:
            await self.notifier.close()

        logger.info(
            f"Ledger 종료: {self.ledger.symbol} total_supply={self.ledger.total_supply}"
        )

    async def __aenter__(self) -> "LedgerRuntime":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


def configure_logging(config: LoggingConfig, log_dir: Path | None = None) -> logging.Logger:
    """설정 파일의 logging 섹션을 루트 로거에 적용"""
    return setup_logging(
        Defaults.LOGGER_NAME,
        console_level=config.console_level,
        file_level=config.file_level,
        log_dir=log_dir,
    )


async def main(config_path: Path | None = None, log_dir: Path | None = None) -> None:
    """Ledger 메인 함수

    설정 로드 → 로깅 적용 → Runtime 구성 → 종료 시 알림 flush 및 불변식 점검.
    """
    try:
        settings = get_settings(config_path)
        config = settings.config
    except ConfigLoadError as e:
        logger.error(f"설정 로드 실패: {e}")
        sys.exit(1)

    configure_logging(config.logging, log_dir=log_dir)

    async with LedgerRuntime.from_config(config) as runtime:
        ledger = runtime.ledger
        logger.info(
            f"Ledger 시작: {ledger.name}({ledger.symbol}) "
            f"total_supply={ledger.total_supply} owner={ledger.owner_account}"
        )
