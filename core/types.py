"""
타입 정의 모듈

Enum 등 핵심 타입 정의
모든 Enum은 str을 상속하여 문자열 직렬화 가능
"""

from enum import Enum


class LedgerEventType(str, Enum):
    """Ledger 알림 이벤트 종류

    성공한 상태 변경 연산마다 하나씩 발생.
    """

    TRANSFER = "Transfer"
    APPROVAL = "Approval"
    BURN = "Burn"
    MINT = "Mint"


class NotificationLevel(str, Enum):
    """알림 레벨"""

    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"
