"""
토큰 Ledger

대체 가능 토큰의 잔고, 허용량(allowance), 발행량을 관리하는 상태 머신.

사용 예시:
```python
from core.ledger import TokenLedger
from adapters.console import ConsoleObserver

ledger = TokenLedger("Spawn Token", "SPN", 1000, max_supply=1500)
ledger.subscribe(ConsoleObserver())

ledger.transfer("owner", "user1", 200)   # True
ledger.approve("owner", "user1", 100)    # True
ledger.transfer_from("owner", "user1", "user2", 50)  # True
ledger.mint("user1", 600)                # False (max_supply 초과)

assert ledger.verify_invariants() == []
```
"""

from core.ledger.amounts import checked_add, checked_sub, is_u64, require_amount
from core.ledger.errors import (
    InvalidAmountError,
    LedgerError,
    ReentrantCallError,
    SupplyOverflowError,
)
from core.ledger.snapshot import LedgerSnapshot, audit_invariants
from core.ledger.synchronized import SynchronizedLedger
from core.ledger.token_ledger import TokenLedger

__all__ = [
    # 핵심 클래스
    "TokenLedger",
    "SynchronizedLedger",
    "LedgerSnapshot",
    # 예외
    "LedgerError",
    "InvalidAmountError",
    "SupplyOverflowError",
    "ReentrantCallError",
    # 유틸리티
    "audit_invariants",
    "checked_add",
    "checked_sub",
    "is_u64",
    "require_amount",
]
