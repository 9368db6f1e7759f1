"""
로깅 설정 유틸리티

Ledger 프로세스에서 사용하는 공통 로깅 설정.
- 콘솔: INFO 레벨
- 파일: INFO 레벨 (TimedRotatingFileHandler, daily)

사용법:
    from core.logging import setup_logging
    setup_logging("ledger")
"""

import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from core.constants import Paths


# 로그 설정 상수
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_BACKUP_COUNT = 7  # 최대 7일치 파일 유지

# 불필요한 로그를 생성하는 로거 목록 (레벨 조정 대상)
NOISY_LOGGERS = [
    "httpcore",       # HTTP 연결 상세 로그
    "httpx",          # HTTP 요청 상세 로그
    "asyncio",        # 비동기 이벤트 루프 로그
]


def setup_logging(
    process_name: str,
    console_level: int = logging.INFO,
    file_level: int = logging.INFO,
    log_dir: Path | None = None,
) -> logging.Logger:
    """로깅 설정 초기화

    Daily 롤링으로 매일 자정에 새 파일 생성.

    Args:
        process_name: 프로세스 이름 (로그 파일명으로 사용)
        console_level: 콘솔 로그 레벨 (기본: INFO)
        file_level: 파일 로그 레벨 (기본: INFO)
        log_dir: 로그 디렉토리 (None이면 Paths.LOGS_DIR)

    Returns:
        설정된 루트 Logger
    """
    if log_dir is None:
        log_dir = Paths.LOGS_DIR

    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = get_log_file_path(process_name, log_dir)

    # 루트 로거 설정
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)  # 루트는 DEBUG로 설정 (핸들러에서 필터링)

    # 기존 핸들러 제거 (중복 방지)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    # 1. 콘솔 핸들러 (StreamHandler)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # 2. 파일 핸들러 (TimedRotatingFileHandler - daily)
    file_handler = TimedRotatingFileHandler(
        filename=log_file,
        when="midnight",          # 매일 자정에 롤링
        interval=1,               # 1일 간격
        backupCount=LOG_FILE_BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.suffix = "%Y-%m-%d"  # 백업 파일 형식: ledger.log.2026-02-21
    file_handler.setLevel(file_level)
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)

    # 3. 불필요한 로거 레벨 조정 (로그 볼륨 감소)
    for logger_name in NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    root_logger.info(f"로깅 초기화 완료: {process_name}")
    root_logger.info(f"  - 콘솔: {logging.getLevelName(console_level)}")
    root_logger.info(f"  - 파일: {log_file} ({logging.getLevelName(file_level)}, daily rotation)")
    root_logger.info(f"  - 보관: {LOG_FILE_BACKUP_COUNT}일")

    return root_logger


def get_log_file_path(process_name: str, log_dir: Path | None = None) -> Path:
    """로그 파일 경로 반환

    Args:
        process_name: 프로세스 이름
        log_dir: 로그 디렉토리 (None이면 Paths.LOGS_DIR)

    Returns:
        로그 파일 Path
    """
    return (log_dir or Paths.LOGS_DIR) / f"{process_name}.log"
