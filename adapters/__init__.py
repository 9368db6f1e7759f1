"""
어댑터 레이어

외부 채널(로그, Slack 등)과의 연동을 담당.
Protocol 기반 인터페이스로 Mock 교체 가능.
"""

from adapters.interfaces import (
    ILedgerObserver,
    INotifier,
)

__all__ = [
    # Interfaces
    "ILedgerObserver",
    "INotifier",
]
