"""
하드코딩 상수 - 변경될 일이 거의 없는 고정값

중요: 경로는 반드시 pathlib.Path 사용 (Windows/Linux 크로스 플랫폼)
"""

from pathlib import Path


# 프로젝트 루트 (이 파일 기준 2단계 상위: core/constants.py → 프로젝트 루트)
PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent


class AmountLimits:
    """금액 범위 상수

    모든 잔고/허용량/총발행량은 부호 없는 64비트 정수.
    범위를 넘는 연산은 wrap 하지 않고 거부한다.
    """

    U64_MAX: int = 2**64 - 1
    MIN_AMOUNT: int = 0


class Defaults:
    """기본값 상수"""

    OWNER_ACCOUNT: str = "owner"
    LOGGER_NAME: str = "ledger"

    SLACK_USERNAME: str = "TokenLedger"
    NOTIFY_QUEUE_SIZE: int = 1000

    LOG_LEVEL: str = "INFO"


class Paths:
    """프로젝트 경로 상수 (pathlib 사용 - OS 독립적)"""

    # 디렉토리
    CONFIG_DIR: Path = PROJECT_ROOT / "config"
    LOGS_DIR: Path = PROJECT_ROOT / "logs"

    # 설정 파일
    TOKEN_CONFIG_FILE: Path = CONFIG_DIR / "token.yaml"
