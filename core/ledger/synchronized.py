"""
SynchronizedLedger

멀티스레드 호스트에 TokenLedger를 임베딩할 때 사용하는 직렬화 래퍼.
Ledger 전체를 하나의 배타적 자원으로 취급하여 단일 락으로 모든 호출을 보호.
"""

import threading
from typing import TYPE_CHECKING

from core.ledger.snapshot import LedgerSnapshot
from core.ledger.token_ledger import TokenLedger

if TYPE_CHECKING:
    from adapters.interfaces import ILedgerObserver


class SynchronizedLedger:
    """락으로 직렬화된 Ledger 파사드

    조회도 락을 잡으므로 다른 스레드의 연산 도중 상태를 읽지 않는다.
    RLock을 사용하므로 같은 스레드의 Observer가 재진입하면 교착 대신
    내부 Ledger의 ReentrantCallError 가드가 동작한다.

    Args:
        ledger: 감쌀 TokenLedger
    """

    def __init__(self, ledger: TokenLedger):
        self._ledger = ledger
        self._lock = threading.RLock()

    @property
    def name(self) -> str:
        return self._ledger.name

    @property
    def symbol(self) -> str:
        return self._ledger.symbol

    @property
    def max_supply(self) -> int | None:
        return self._ledger.max_supply

    @property
    def owner_account(self) -> str:
        return self._ledger.owner_account

    @property
    def event_seq(self) -> int:
        with self._lock:
            return self._ledger.event_seq

    @property
    def total_supply(self) -> int:
        with self._lock:
            return self._ledger.total_supply

    def balance_of(self, account: str) -> int:
        with self._lock:
            return self._ledger.balance_of(account)

    def allowance(self, owner: str, spender: str) -> int:
        with self._lock:
            return self._ledger.allowance(owner, spender)

    def accounts(self) -> list[str]:
        with self._lock:
            return self._ledger.accounts()

    def snapshot(self) -> LedgerSnapshot:
        with self._lock:
            return self._ledger.snapshot()

    def verify_invariants(self) -> list[str]:
        with self._lock:
            return self._ledger.verify_invariants()

    def subscribe(self, observer: "ILedgerObserver") -> None:
        with self._lock:
            self._ledger.subscribe(observer)

    def unsubscribe(self, observer: "ILedgerObserver") -> None:
        with self._lock:
            self._ledger.unsubscribe(observer)

    def transfer(self, sender: str, recipient: str, amount: int) -> bool:
        with self._lock:
            return self._ledger.transfer(sender, recipient, amount)

    def approve(self, owner: str, spender: str, amount: int) -> bool:
        with self._lock:
            return self._ledger.approve(owner, spender, amount)

    def transfer_from(self, owner: str, spender: str, recipient: str, amount: int) -> bool:
        with self._lock:
            return self._ledger.transfer_from(owner, spender, recipient, amount)

    def burn(self, owner: str, amount: int) -> bool:
        with self._lock:
            return self._ledger.burn(owner, amount)

    def mint(self, recipient: str, amount: int) -> bool:
        with self._lock:
            return self._ledger.mint(recipient, amount)
