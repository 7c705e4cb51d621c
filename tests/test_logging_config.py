import logging

from deposition.logging_config import setup_logging
from deposition.system import compute_system_parameters


def _reset(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


def test_setup_logging_writes_package_logs_to_file(tmp_path) -> None:
    log_path = tmp_path / "run.log"
    logger = setup_logging(level=logging.INFO, log_file=str(log_path))
    try:
        assert logger.name == "deposition"
        assert len(logger.handlers) == 2
        compute_system_parameters(2.21, 56.6, 25.0, 101.325)
        for handler in logger.handlers:
            handler.flush()
        assert "System parameters" in log_path.read_text(encoding="utf-8")
    finally:
        _reset(logger)


def test_setup_logging_closes_previous_file_handler(tmp_path) -> None:
    logger = setup_logging(level=logging.INFO, log_file=str(tmp_path / "first.log"))
    try:
        file_handler = next(h for h in logger.handlers if isinstance(h, logging.FileHandler))
        setup_logging(level=logging.INFO)
        assert file_handler not in logger.handlers
        assert file_handler.stream is None
        assert len(logger.handlers) == 1
    finally:
        _reset(logger)
