"""
TokenLedger

대체 가능 토큰(fungible token)의 잔고/허용량/발행량을 관리하는 상태 머신.

연산 규칙:
- 모든 상태 변경 연산은 "검증 → 변경 → 알림" 순서
- 검증이 모두 끝난 뒤에만 쓰기 수행 (롤백 불필요)
- 예상된 거부 조건은 False 반환, 상태 변화 없음
- 알림은 커밋 이후 동기 전파, 전파 중 재진입 변경은 금지

스레드 안전하지 않음. 멀티스레드 환경에서는 SynchronizedLedger 사용.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable

from core.constants import Defaults
from core.domain.events import LedgerEvent
from core.ledger.amounts import checked_add, checked_sub, require_amount
from core.ledger.errors import InvalidAmountError, ReentrantCallError
from core.ledger.snapshot import LedgerSnapshot, audit_invariants

if TYPE_CHECKING:
    from adapters.interfaces import ILedgerObserver

logger = logging.getLogger(__name__)


class TokenLedger:
    """토큰 Ledger

    Args:
        name: 토큰 이름 (불변)
        symbol: 토큰 심볼 (불변)
        initial_supply: 초기 발행량 (owner_account에 전액 입금)
        max_supply: 최대 발행량 (None이면 상한 없음, u64 범위만 적용)
        owner_account: 초기 발행량을 받는 계정 ID
        observers: 커밋 이후 이벤트를 받을 Observer 목록

    사용 예시:
    ```python
    ledger = TokenLedger("Spawn Token", "SPN", 1000)
    ledger.transfer("owner", "user1", 200)
    ledger.balance_of("user1")  # 200
    ```
    """

    def __init__(
        self,
        name: str,
        symbol: str,
        initial_supply: int,
        max_supply: int | None = None,
        *,
        owner_account: str = Defaults.OWNER_ACCOUNT,
        observers: Iterable["ILedgerObserver"] | None = None,
    ) -> None:
        require_amount(initial_supply, "initial_supply")
        if max_supply is not None:
            require_amount(max_supply, "max_supply")
            if initial_supply > max_supply:
                raise InvalidAmountError(
                    f"initial_supply({initial_supply})가 max_supply({max_supply})를 초과합니다"
                )

        self._name = name
        self._symbol = symbol
        self._max_supply = max_supply
        self._owner_account = owner_account
        self._total_supply = initial_supply
        self._balances: dict[str, int] = {owner_account: initial_supply}
        self._allowances: dict[str, dict[str, int]] = {}

        self._observers: list["ILedgerObserver"] = list(observers or [])
        self._event_seq = 0
        self._dispatching = False

        logger.info(
            "Ledger 생성: %s(%s) initial_supply=%d max_supply=%s owner=%s",
            name,
            symbol,
            initial_supply,
            max_supply if max_supply is not None else "unbounded",
            owner_account,
        )

    # -------------------------------------------------------------------------
    # 조회 (부수 효과 없음)
    # -------------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def symbol(self) -> str:
        return self._symbol

    @property
    def total_supply(self) -> int:
        return self._total_supply

    @property
    def max_supply(self) -> int | None:
        """최대 발행량 (None이면 상한 없음)"""
        return self._max_supply

    @property
    def owner_account(self) -> str:
        return self._owner_account

    @property
    def event_seq(self) -> int:
        """마지막으로 발행된 이벤트 시퀀스 번호"""
        return self._event_seq

    def balance_of(self, account: str) -> int:
        """계정 잔고 조회 (미참조 계정은 0)"""
        return self._balances.get(account, 0)

    def allowance(self, owner: str, spender: str) -> int:
        """spender가 owner 자금에서 사용할 수 있는 한도 (미설정 시 0)"""
        return self._allowances.get(owner, {}).get(spender, 0)

    def accounts(self) -> list[str]:
        """잔고 맵에 한 번이라도 등록된 계정 목록 (등록 순서)"""
        return list(self._balances)

    def snapshot(self) -> LedgerSnapshot:
        """현재 상태의 읽기 전용 사본"""
        return LedgerSnapshot.capture(
            name=self._name,
            symbol=self._symbol,
            total_supply=self._total_supply,
            max_supply=self._max_supply,
            balances=self._balances,
            allowances=self._allowances,
        )

    def verify_invariants(self) -> list[str]:
        """불변식 위반 목록 반환 (빈 리스트면 정상)"""
        return audit_invariants(self.snapshot())

    # -------------------------------------------------------------------------
    # Observer 관리
    # -------------------------------------------------------------------------

    def subscribe(self, observer: "ILedgerObserver") -> None:
        """Observer 등록"""
        self._ensure_not_dispatching("subscribe")
        self._observers.append(observer)

    def unsubscribe(self, observer: "ILedgerObserver") -> None:
        """Observer 해제 (미등록이면 무시)"""
        self._ensure_not_dispatching("unsubscribe")
        if observer in self._observers:
            self._observers.remove(observer)

    # -------------------------------------------------------------------------
    # 상태 변경
    # -------------------------------------------------------------------------

    def transfer(self, sender: str, recipient: str, amount: int) -> bool:
        """sender → recipient 로 amount 이체

        Returns:
            성공 여부. 자기 자신 이체, 0 이체, 잔고 부족 시 False
        """
        self._ensure_not_dispatching("transfer")
        require_amount(amount)

        reason = self._transfer_rejection(sender, recipient, amount)
        if reason:
            logger.debug("transfer 거부: %s (from=%s to=%s amount=%d)", reason, sender, recipient, amount)
            return False

        self._apply_transfer(sender, recipient, amount)
        self._dispatch([self._next_event(LedgerEvent.transfer, sender, recipient, amount)])
        return True

    def approve(self, owner: str, spender: str, amount: int) -> bool:
        """spender의 owner 자금 사용 한도를 amount로 설정

        기존 값에 더하지 않고 교체한다. 0이 아닌 값에서 0이 아닌 값으로 바로
        변경하는 것도 허용됨 (알려진 경쟁 조건 패턴, 기본 동작으로 유지).

        Returns:
            성공 여부. owner == spender 이면 False
        """
        self._ensure_not_dispatching("approve")
        require_amount(amount)

        if owner == spender:
            logger.debug("approve 거부: 자기 자신 승인 (owner=%s)", owner)
            return False

        self._apply_approve(owner, spender, amount)
        self._dispatch([self._next_event(LedgerEvent.approval, owner, spender, amount)])
        return True

    def transfer_from(self, owner: str, spender: str, recipient: str, amount: int) -> bool:
        """spender가 허용량을 소모하여 owner → recipient 로 이체

        허용량 검증 후 일반 이체 규칙을 그대로 적용한다.
        이체와 허용량 차감은 함께 커밋되고, 알림은 Transfer → Approval 순서.

        Returns:
            성공 여부. 허용량 부족 또는 이체 거부 조건이면 False (허용량 유지)
        """
        self._ensure_not_dispatching("transfer_from")
        require_amount(amount)

        current = self.allowance(owner, spender)
        if current < amount:
            logger.debug(
                "transfer_from 거부: 허용량 부족 (owner=%s spender=%s allowance=%d amount=%d)",
                owner,
                spender,
                current,
                amount,
            )
            return False

        reason = self._transfer_rejection(owner, recipient, amount)
        if reason:
            logger.debug(
                "transfer_from 거부: %s (owner=%s spender=%s to=%s amount=%d)",
                reason,
                owner,
                spender,
                recipient,
                amount,
            )
            return False

        remaining = checked_sub(current, amount)
        self._apply_transfer(owner, recipient, amount)
        self._apply_approve(owner, spender, remaining)

        self._dispatch([
            self._next_event(LedgerEvent.transfer, owner, recipient, amount),
            self._next_event(LedgerEvent.approval, owner, spender, remaining),
        ])
        return True

    def burn(self, owner: str, amount: int) -> bool:
        """owner 잔고에서 amount 소각, 총발행량 감소

        Returns:
            성공 여부. 잔고 부족 시 False
        """
        self._ensure_not_dispatching("burn")
        require_amount(amount)

        balance = self.balance_of(owner)
        if balance < amount:
            logger.debug("burn 거부: 잔고 부족 (owner=%s balance=%d amount=%d)", owner, balance, amount)
            return False

        self._balances[owner] = checked_sub(balance, amount)
        self._total_supply = checked_sub(self._total_supply, amount)

        self._dispatch([self._next_event(LedgerEvent.burn, owner, amount)])
        return True

    def mint(self, recipient: str, amount: int) -> bool:
        """recipient에게 amount 신규 발행, 총발행량 증가

        Returns:
            성공 여부. max_supply 초과 시 False

        Raises:
            SupplyOverflowError: total_supply + amount 가 u64 범위를 넘는 경우
        """
        self._ensure_not_dispatching("mint")
        require_amount(amount)

        new_total = checked_add(self._total_supply, amount)
        if self._max_supply is not None and new_total > self._max_supply:
            logger.debug(
                "mint 거부: 최대 발행량 초과 (total=%d amount=%d max=%d)",
                self._total_supply,
                amount,
                self._max_supply,
            )
            return False

        # 개별 잔고 <= 총발행량 이므로 여기서는 오버플로 불가
        self._balances[recipient] = checked_add(self.balance_of(recipient), amount)
        self._total_supply = new_total

        self._dispatch([self._next_event(LedgerEvent.mint, recipient, amount)])
        return True

    # -------------------------------------------------------------------------
    # 내부 헬퍼
    # -------------------------------------------------------------------------

    def _transfer_rejection(self, sender: str, recipient: str, amount: int) -> str | None:
        """이체 거부 사유 반환 (통과 시 None)"""
        if sender == recipient:
            return "자기 자신 이체"
        if amount == 0:
            return "0 이체"
        if self.balance_of(sender) < amount:
            return "잔고 부족"
        return None

    def _apply_transfer(self, sender: str, recipient: str, amount: int) -> None:
        # 검증 완료 이후에만 호출
        self._balances[sender] = checked_sub(self.balance_of(sender), amount)
        self._balances[recipient] = checked_add(self.balance_of(recipient), amount)

    def _apply_approve(self, owner: str, spender: str, amount: int) -> None:
        self._allowances.setdefault(owner, {})[spender] = amount

    def _next_event(self, factory, *args) -> LedgerEvent:
        self._event_seq += 1
        return factory(self._event_seq, *args)

    def _ensure_not_dispatching(self, operation: str) -> None:
        if self._dispatching:
            raise ReentrantCallError(
                f"알림 전파 중에는 '{operation}' 호출이 금지됩니다"
            )

    def _dispatch(self, events: list[LedgerEvent]) -> None:
        """커밋된 이벤트를 Observer에게 전파

        Observer 예외는 로그만 남기고 다음 Observer로 계속 진행.
        커밋된 변경은 되돌리지 않는다.
        """
        self._dispatching = True
        try:
            for event in events:
                logger.debug("Ledger 이벤트: %s #%d %s", event.name, event.seq, event.detail)
                for observer in list(self._observers):
                    try:
                        observer.notify(event)
                    except Exception as e:
                        logger.exception(
                            "Observer 알림 실패: observer=%s event=%s #%d: %s",
                            type(observer).__name__,
                            event.name,
                            event.seq,
                            e,
                        )
        finally:
            self._dispatching = False
