"""
Ledger 예외 정의

예상된 거부 조건(잔고 부족, 허용량 부족, 자기 자신 이체 등)은 예외가 아니라
False 반환으로 처리한다. 여기 정의된 예외는 호출 계약 위반 전용.
"""


class LedgerError(Exception):
    """Ledger 오류 기본 클래스"""

    pass


class InvalidAmountError(LedgerError, ValueError):
    """u64 범위를 벗어나거나 정수가 아닌 금액"""

    pass


class SupplyOverflowError(LedgerError, OverflowError):
    """총발행량 누적 시 u64 오버플로 (치명적 오류)"""

    pass


class ReentrantCallError(LedgerError, RuntimeError):
    """알림 전파 중 Ledger 상태 변경 시도"""

    pass
