"""
설정 로더

token.yaml 로드 및 Ledger/알림/로깅 설정 생성
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from core.constants import Defaults, Paths
from core.ledger.amounts import is_u64


@dataclass(frozen=True)
class TokenConfig:
    """토큰 설정

    불변 데이터 구조로 설정 변경 방지
    """

    name: str
    symbol: str
    initial_supply: int
    max_supply: int | None = None
    owner_account: str = Defaults.OWNER_ACCOUNT


@dataclass(frozen=True)
class NotifierConfig:
    """알림 설정

    slack_webhook_url이 비어 있으면 Slack 알림 비활성화
    """

    slack_webhook_url: str = ""
    slack_channel: str | None = None
    slack_username: str = Defaults.SLACK_USERNAME
    queue_size: int = Defaults.NOTIFY_QUEUE_SIZE

    @property
    def slack_enabled(self) -> bool:
        return bool(self.slack_webhook_url)


@dataclass(frozen=True)
class LoggingConfig:
    """로깅 설정"""

    console_level: int = logging.INFO
    file_level: int = logging.INFO


@dataclass(frozen=True)
class LedgerConfig:
    """전체 설정 묶음"""

    token: TokenConfig
    notifier: NotifierConfig
    logging: LoggingConfig


class ConfigLoadError(Exception):
    """설정 로드 실패 예외"""

    pass


def _parse_amount(value: Any, field: str) -> int:
    if not is_u64(value):
        raise ConfigLoadError(
            f"token.{field}는 0 이상의 u64 정수여야 합니다: {value!r}"
        )
    return value


def _parse_level(value: Any, field: str) -> int:
    if value is None:
        return logging.INFO
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    level = logging.getLevelName(str(value).upper())
    if not isinstance(level, int):
        raise ConfigLoadError(f"logging.{field}가 유효한 로그 레벨이 아닙니다: {value!r}")
    return level


def _parse_token(data: dict[str, Any]) -> TokenConfig:
    token_data = data.get("token")
    if not isinstance(token_data, dict):
        raise ConfigLoadError("token.yaml에 'token' 섹션이 없습니다")

    name = token_data.get("name")
    symbol = token_data.get("symbol")
    if not name or not str(name).strip():
        raise ConfigLoadError("token 섹션에 'name'이 없습니다")
    if not symbol or not str(symbol).strip():
        raise ConfigLoadError("token 섹션에 'symbol'이 없습니다")

    initial_supply = _parse_amount(token_data.get("initial_supply"), "initial_supply")

    max_supply = token_data.get("max_supply")
    if max_supply is not None:
        max_supply = _parse_amount(max_supply, "max_supply")
        if initial_supply > max_supply:
            raise ConfigLoadError(
                f"initial_supply({initial_supply})가 max_supply({max_supply})를 초과합니다"
            )

    owner_account = token_data.get("owner_account") or Defaults.OWNER_ACCOUNT

    return TokenConfig(
        name=str(name),
        symbol=str(symbol),
        initial_supply=initial_supply,
        max_supply=max_supply,
        owner_account=str(owner_account),
    )


def _parse_notifier(data: dict[str, Any]) -> NotifierConfig:
    notifier_data = data.get("notifier") or {}
    slack_data = notifier_data.get("slack") or {}

    queue_size = notifier_data.get("queue_size", Defaults.NOTIFY_QUEUE_SIZE)
    if not isinstance(queue_size, int) or isinstance(queue_size, bool) or queue_size <= 0:
        raise ConfigLoadError(f"notifier.queue_size는 양의 정수여야 합니다: {queue_size!r}")

    return NotifierConfig(
        slack_webhook_url=slack_data.get("webhook_url") or "",
        slack_channel=slack_data.get("channel"),
        slack_username=slack_data.get("username") or Defaults.SLACK_USERNAME,
        queue_size=queue_size,
    )


def _parse_logging(data: dict[str, Any]) -> LoggingConfig:
    logging_data = data.get("logging") or {}
    return LoggingConfig(
        console_level=_parse_level(logging_data.get("console_level"), "console_level"),
        file_level=_parse_level(logging_data.get("file_level"), "file_level"),
    )


def load_token_config(path: Path | None = None) -> LedgerConfig:
    """token.yaml 파일 로드

    Args:
        path: token.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        LedgerConfig 인스턴스

    Raises:
        ConfigLoadError: 파일이 없거나 형식이 잘못된 경우
    """
    if path is None:
        path = Paths.TOKEN_CONFIG_FILE

    if not path.exists():
        raise ConfigLoadError(f"token.yaml 파일을 찾을 수 없습니다: {path}")

    try:
        content = path.read_text(encoding="utf-8")
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigLoadError(f"token.yaml 파싱 실패: {e}") from e

    if data is None:
        raise ConfigLoadError("token.yaml이 비어 있습니다")

    if not isinstance(data, dict):
        raise ConfigLoadError("token.yaml 최상위는 매핑이어야 합니다")

    return LedgerConfig(
        token=_parse_token(data),
        notifier=_parse_notifier(data),
        logging=_parse_logging(data),
    )


class Settings:
    """애플리케이션 설정 (싱글턴 패턴)

    token.yaml을 로드하고 관련 설정을 제공
    """

    _instance: "Settings | None" = None
    _config: LedgerConfig | None = None

    def __new__(cls, config_path: Path | None = None) -> "Settings":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, config_path: Path | None = None) -> None:
        if self._config is None:
            type(self)._config = load_token_config(config_path)

    @property
    def config(self) -> LedgerConfig:
        """전체 설정"""
        assert self._config is not None
        return self._config

    @property
    def token(self) -> TokenConfig:
        """토큰 설정"""
        assert self._config is not None
        return self._config.token

    @property
    def notifier(self) -> NotifierConfig:
        """알림 설정"""
        assert self._config is not None
        return self._config.notifier

    @property
    def logging(self) -> LoggingConfig:
        """로깅 설정"""
        assert self._config is not None
        return self._config.logging

    @classmethod
    def reset(cls) -> None:
        """싱글턴 인스턴스 초기화 (테스트용)"""
        cls._instance = None
        cls._config = None


def get_settings(config_path: Path | None = None) -> Settings:
    """Settings 인스턴스 반환

    Args:
        config_path: token.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        Settings 싱글턴 인스턴스
    """
    return Settings(config_path)
