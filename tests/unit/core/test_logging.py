"""
core/logging.py 테스트

핸들러 구성과 로그 파일 생성 확인
"""

import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from core.constants import Paths
from core.logging import LOG_FILE_BACKUP_COUNT, get_log_file_path, setup_logging


class TestSetupLogging:
    """setup_logging 테스트"""

    def test_handlers_configured(self, temp_dir: Path, restore_root_logger) -> None:
        """콘솔 + 일별 파일 핸들러"""
        root = setup_logging("ledger", log_dir=temp_dir)

        assert root.level == logging.DEBUG
        assert len(root.handlers) == 2

        file_handlers = [h for h in root.handlers if isinstance(h, TimedRotatingFileHandler)]
        assert len(file_handlers) == 1
        assert file_handlers[0].backupCount == LOG_FILE_BACKUP_COUNT

    def test_levels(self, temp_dir: Path, restore_root_logger) -> None:
        """핸들러별 레벨 지정"""
        root = setup_logging(
            "ledger",
            console_level=logging.WARNING,
            file_level=logging.DEBUG,
            log_dir=temp_dir,
        )

        levels = sorted(h.level for h in root.handlers)
        assert levels == [logging.DEBUG, logging.WARNING]

    def test_log_file_written(self, temp_dir: Path, restore_root_logger) -> None:
        """로그 파일에 기록"""
        setup_logging("ledger", log_dir=temp_dir)
        logging.getLogger("ledger.test").info("hello ledger")

        for handler in logging.getLogger().handlers:
            handler.flush()

        content = (temp_dir / "ledger.log").read_text(encoding="utf-8")
        assert "hello ledger" in content
        assert "로깅 초기화 완료: ledger" in content

    def test_repeated_setup_does_not_duplicate(self, temp_dir: Path, restore_root_logger) -> None:
        """재호출 시 핸들러 중복 없음"""
        setup_logging("ledger", log_dir=temp_dir)
        root = setup_logging("ledger", log_dir=temp_dir)

        assert len(root.handlers) == 2

    def test_noisy_loggers_quieted(self, temp_dir: Path, restore_root_logger) -> None:
        """httpx 로그 레벨 상향"""
        setup_logging("ledger", log_dir=temp_dir)

        assert logging.getLogger("httpx").level == logging.WARNING


class TestGetLogFilePath:
    """get_log_file_path 테스트"""

    def test_default_dir(self) -> None:
        assert get_log_file_path("ledger") == Paths.LOGS_DIR / "ledger.log"

    def test_custom_dir(self, temp_dir: Path) -> None:
        assert get_log_file_path("ledger", temp_dir) == temp_dir / "ledger.log"
