"""
Test that all modules can be imported correctly
Run this after installing dependencies to validate the setup
"""
import logging


def test_package_imports():
    """Test public package imports"""
    from gameq import AddressResolver, Server, SocketPool, registry
    from gameq.config import settings
    from gameq.query import NativeSocket, QueryCore

    assert issubclass(NativeSocket, QueryCore)
    assert settings.socket_timeout_sec > 0


def test_builtin_protocols_registered():
    """Importing gameq registers the shipped protocols"""
    from gameq import registry

    for name in ("source", "csgo", "arma3", "quake3", "gamespy3", "minecraft", "mta", "bf3", "teamspeak3", "ts3"):
        assert name in registry


def test_settings_from_environment(monkeypatch):
    from gameq.config import Settings

    monkeypatch.setenv("GAMEQ_SOCKET_TIMEOUT_SEC", "7.5")
    monkeypatch.setenv("GAMEQ_RESOLVE_HOSTNAMES", "false")

    configured = Settings()
    assert configured.socket_timeout_sec == 7.5
    assert configured.resolve_hostnames is False


def test_setup_logging_routes_component_loggers(monkeypatch, tmp_path):
    """Events from package modules reach the gameq log file under their component name"""
    import structlog
    from unittest.mock import MagicMock

    from gameq.config import settings
    from gameq.logging import LOGGER_NAME, setup_logging
    from gameq.pool import SocketPool

    monkeypatch.setattr(settings, "log_dir", tmp_path)
    gameq_logger = logging.getLogger(LOGGER_NAME)

    try:
        setup_logging(level=logging.DEBUG, filename="gameq-test")

        failing = MagicMock()
        failing.close.side_effect = OSError("already gone")
        pool = SocketPool(owner="1.2.3.4:27015")
        pool.add(failing)
        pool.cleanse()

        content = (tmp_path / "gameq-test.log").read_text()
        assert "logging_initialized" in content
        assert "socket_close_failed" in content
        assert "gameq.pool" in content
    finally:
        for handler in list(gameq_logger.handlers):
            gameq_logger.removeHandler(handler)
            handler.close()
        gameq_logger.setLevel(logging.NOTSET)
        structlog.reset_defaults()


def test_setup_logging_replaces_own_handlers(monkeypatch, tmp_path):
    import structlog

    from gameq.config import settings
    from gameq.logging import setup_logging

    monkeypatch.setattr(settings, "log_dir", tmp_path)
    gameq_logger = logging.getLogger("gameq")

    try:
        setup_logging(log_to_file=False)
        assert setup_logging(level=logging.WARNING, log_to_file=False) is gameq_logger

        assert len(gameq_logger.handlers) == 1
        assert gameq_logger.level == logging.WARNING
    finally:
        for handler in list(gameq_logger.handlers):
            gameq_logger.removeHandler(handler)
            handler.close()
        gameq_logger.setLevel(logging.NOTSET)
        structlog.reset_defaults()
