"""
Ledger Runtime

설정 → Ledger → Observer/Notifier 연결.
"""

from runtime.bootstrap import LedgerRuntime, configure_logging, create_notifier, main

__all__ = [
    "LedgerRuntime",
    "configure_logging",
    "create_notifier",
    "main",
]
