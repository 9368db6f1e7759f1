"""
콘솔 로그 Observer

Ledger 이벤트를 logging 채널로 출력.
ILedgerObserver Protocol 준수.
"""

import logging

from core.domain.events import LedgerEvent


class ConsoleObserver:
    """로그 채널 Observer

    `[Transfer] from=owner to=user1 amount=200` 형태로 한 줄씩 기록.

    Args:
        logger_name: 출력할 로거 이름
        level: 로그 레벨
    """

    def __init__(self, logger_name: str = "ledger.events", level: int = logging.INFO):
        self._logger = logging.getLogger(logger_name)
        self._level = level

    def notify(self, event: LedgerEvent) -> None:
        """이벤트 로그 출력"""
        name, detail = event.as_notification()
        self._logger.log(self._level, "[%s] #%d %s", name, event.seq, detail)
