"""
콘솔 어댑터

logging 채널로 Ledger 이벤트 출력.
ILedgerObserver Protocol 준수.
"""

from adapters.console.observer import ConsoleObserver

__all__ = [
    "ConsoleObserver",
]
