"""
큐 어댑터

Ledger 알림을 큐에 적재 후 비동기 Notifier로 전달.
ILedgerObserver Protocol 준수.
"""

from adapters.queue.observer import QueuedNotifierObserver

__all__ = [
    "QueuedNotifierObserver",
]
