"""
Ledger 스냅샷 및 불변식 점검

스냅샷은 내부 맵의 깊은 사본을 읽기 전용 매핑으로 감싸 보관한다.
이후 Ledger 변경의 영향을 받지 않으며 호출자도 수정할 수 없다.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

from core.ledger.amounts import is_u64


@dataclass(frozen=True)
class LedgerSnapshot:
    """특정 시점의 Ledger 상태 (불변)"""

    name: str
    symbol: str
    total_supply: int
    max_supply: int | None
    balances: Mapping[str, int] = field(default_factory=dict)
    allowances: Mapping[str, Mapping[str, int]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "balances", MappingProxyType(dict(self.balances)))
        object.__setattr__(
            self,
            "allowances",
            MappingProxyType(
                {owner: MappingProxyType(dict(spenders)) for owner, spenders in self.allowances.items()}
            ),
        )

    @classmethod
    def capture(
        cls,
        name: str,
        symbol: str,
        total_supply: int,
        max_supply: int | None,
        balances: Mapping[str, int],
        allowances: Mapping[str, Mapping[str, int]],
    ) -> "LedgerSnapshot":
        """내부 맵을 복사하여 스냅샷 생성"""
        return cls(
            name=name,
            symbol=symbol,
            total_supply=total_supply,
            max_supply=max_supply,
            balances=balances,
            allowances=allowances,
        )

    @property
    def balance_sum(self) -> int:
        return sum(self.balances.values())

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리로 변환 (직렬화용)"""
        return {
            "name": self.name,
            "symbol": self.symbol,
            "total_supply": self.total_supply,
            "max_supply": self.max_supply,
            "balances": dict(self.balances),
            "allowances": {owner: dict(spenders) for owner, spenders in self.allowances.items()},
        }


def audit_invariants(snapshot: LedgerSnapshot) -> list[str]:
    """불변식 점검

    점검 항목:
    - total_supply == 잔고 합계
    - total_supply <= max_supply (상한이 있는 경우)
    - 모든 잔고/허용량이 u64 범위

    Args:
        snapshot: 점검할 스냅샷

    Returns:
        위반 설명 목록 (빈 리스트면 정상)
    """
    violations: list[str] = []

    if snapshot.total_supply != snapshot.balance_sum:
        violations.append(
            f"total_supply({snapshot.total_supply}) != 잔고 합계({snapshot.balance_sum})"
        )

    if snapshot.max_supply is not None and snapshot.total_supply > snapshot.max_supply:
        violations.append(
            f"total_supply({snapshot.total_supply}) > max_supply({snapshot.max_supply})"
        )

    for account, balance in snapshot.balances.items():
        if not is_u64(balance):
            violations.append(f"잔고 범위 오류: {account}={balance!r}")

    for owner, spenders in snapshot.allowances.items():
        for spender, amount in spenders.items():
            if not is_u64(amount):
                violations.append(f"허용량 범위 오류: {owner}->{spender}={amount!r}")

    return violations
