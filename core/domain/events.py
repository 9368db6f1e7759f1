"""
Ledger Event 도메인 모델

성공한 모든 상태 변경은 LedgerEvent로 외부에 알림.
Observer는 불변 이벤트만 받으며 Ledger 핸들은 받지 않는다.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Mapping

from core.types import LedgerEventType


# 이벤트 타입별 detail 문자열에 포함할 payload 키 (순서 유지)
DETAIL_KEYS: dict[LedgerEventType, tuple[str, ...]] = {
    LedgerEventType.TRANSFER: ("from", "to", "amount"),
    LedgerEventType.APPROVAL: ("owner", "spender", "amount"),
    LedgerEventType.BURN: ("owner", "amount"),
    LedgerEventType.MINT: ("recipient", "amount"),
}


def _freeze(payload: Mapping[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType(dict(payload))


@dataclass(frozen=True)
class LedgerEvent:
    """Ledger 알림 이벤트 (불변)

    상태 변경이 커밋된 이후에만 생성됨.
    payload는 읽기 전용 매핑으로 감싸서 보관.
    """

    event_type: LedgerEventType
    seq: int
    payload: Mapping[str, Any]
    ts: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        if not isinstance(self.payload, MappingProxyType):
            object.__setattr__(self, "payload", _freeze(self.payload))

    @staticmethod
    def transfer(seq: int, sender: str, recipient: str, amount: int) -> "LedgerEvent":
        """Transfer 이벤트 생성"""
        return LedgerEvent(
            event_type=LedgerEventType.TRANSFER,
            seq=seq,
            payload={"from": sender, "to": recipient, "amount": amount},
        )

    @staticmethod
    def approval(seq: int, owner: str, spender: str, amount: int) -> "LedgerEvent":
        """Approval 이벤트 생성"""
        return LedgerEvent(
            event_type=LedgerEventType.APPROVAL,
            seq=seq,
            payload={"owner": owner, "spender": spender, "amount": amount},
        )

    @staticmethod
    def burn(seq: int, owner: str, amount: int) -> "LedgerEvent":
        """Burn 이벤트 생성"""
        return LedgerEvent(
            event_type=LedgerEventType.BURN,
            seq=seq,
            payload={"owner": owner, "amount": amount},
        )

    @staticmethod
    def mint(seq: int, recipient: str, amount: int) -> "LedgerEvent":
        """Mint 이벤트 생성"""
        return LedgerEvent(
            event_type=LedgerEventType.MINT,
            seq=seq,
            payload={"recipient": recipient, "amount": amount},
        )

    @property
    def name(self) -> str:
        """이벤트 이름 (예: Transfer)"""
        return self.event_type.value

    @property
    def amount(self) -> int:
        """이벤트 금액"""
        return int(self.payload["amount"])

    @property
    def detail(self) -> str:
        """알림 싱크로 전달되는 상세 문자열

        Example:
            >>> LedgerEvent.transfer(1, "owner", "user1", 200).detail
            'from=owner to=user1 amount=200'
        """
        keys = DETAIL_KEYS.get(self.event_type, tuple(self.payload.keys()))
        return " ".join(f"{key}={self.payload[key]}" for key in keys)

    def as_notification(self) -> tuple[str, str]:
        """(event_name, detail_string) 쌍 반환"""
        return self.name, self.detail

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리로 변환 (직렬화용)"""
        return {
            "event_type": self.event_type.value,
            "seq": self.seq,
            "ts": self.ts.isoformat(),
            "payload": dict(self.payload),
        }

    @staticmethod
    def from_dict(data: dict[str, Any]) -> "LedgerEvent":
        """딕셔너리에서 생성 (역직렬화용)"""
        ts = data["ts"]
        if isinstance(ts, str):
            ts = datetime.fromisoformat(ts)

        return LedgerEvent(
            event_type=LedgerEventType(data["event_type"]),
            seq=int(data["seq"]),
            payload=data.get("payload", {}),
            ts=ts,
        )
