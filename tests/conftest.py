"""
pytest 공통 fixture 정의

Ledger, Observer, 설정 파일 fixture
"""

import logging
import tempfile
from pathlib import Path

import pytest

from adapters.mock.observer import RecordingObserver
from core.config.loader import Settings
from core.ledger.token_ledger import TokenLedger


@pytest.fixture
def temp_dir() -> Path:
    """OS 독립적인 임시 디렉토리 생성"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def ledger() -> TokenLedger:
    """기본 Ledger (상한 없음, owner 1000)"""
    return TokenLedger("Spawn Token", "SPN", 1000)


@pytest.fixture
def capped_ledger() -> TokenLedger:
    """최대 발행량이 있는 Ledger (owner 1000 / max 1500)"""
    return TokenLedger("Spawn Token", "SPN", 1000, max_supply=1500)


@pytest.fixture
def recorder() -> RecordingObserver:
    """이벤트 기록 Observer"""
    return RecordingObserver()


@pytest.fixture
def observed_ledger(recorder: RecordingObserver) -> TokenLedger:
    """RecordingObserver가 등록된 Ledger"""
    return TokenLedger("Spawn Token", "SPN", 1000, observers=[recorder])


@pytest.fixture(autouse=True)
def reset_settings():
    """Settings 싱글턴 초기화"""
    Settings.reset()
    yield
    Settings.reset()


@pytest.fixture
def restore_root_logger():
    """테스트 후 루트 로거 핸들러/레벨 복원"""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


@pytest.fixture
def temp_token_config(temp_dir: Path) -> Path:
    """테스트용 token.yaml 파일 생성"""
    content = """# 테스트용 token.yaml
token:
  name: "Spawn Token"
  symbol: "SPN"
  initial_supply: 1000
  max_supply: 1500
  owner_account: "treasury"

notifier:
  slack:
    webhook_url: "https://hooks.slack.com/services/test"
    channel: "#ledger"
    username: "LedgerBot"
  queue_size: 50

logging:
  console_level: "DEBUG"
  file_level: "WARNING"
"""
    config_path = temp_dir / "token.yaml"
    config_path.write_text(content, encoding="utf-8")
    return config_path


@pytest.fixture
def temp_token_config_minimal(temp_dir: Path) -> Path:
    """필수 항목만 있는 token.yaml 파일 생성"""
    content = """token:
  name: "Spawn Token"
  symbol: "SPN"
  initial_supply: 1000
"""
    config_path = temp_dir / "token_minimal.yaml"
    config_path.write_text(content, encoding="utf-8")
    return config_path
