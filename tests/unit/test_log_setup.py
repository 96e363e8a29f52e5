"""Unit tests for logging configuration."""

from loguru import logger

from referral_wallet.config.settings import Settings
from referral_wallet.utils.log_setup import setup_logging


def test_file_sink_written(tmp_path):
    """Test configured log file receives records."""
    log_file = tmp_path / "wallet.log"
    settings = Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        environment="test",
        log_level="info",
        log_file=str(log_file),
    )

    setup_logging(settings)
    logger.bind(service="Test").info("Redemption recorded")
    logger.complete()
    logger.remove()

    content = log_file.read_text(encoding="utf-8")
    assert "Logging configured" in content
    assert "Redemption recorded" in content


def test_level_filters_debug(tmp_path):
    """Test records below the configured level are dropped."""
    log_file = tmp_path / "wallet.log"
    settings = Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        environment="test",
        log_level="WARNING",
        log_file=str(log_file),
    )

    setup_logging(settings)
    logger.debug("hidden detail")
    logger.warning("visible warning")
    logger.remove()

    content = log_file.read_text(encoding="utf-8")
    assert "hidden detail" not in content
    assert "visible warning" in content
