from __future__ import annotations

from formstate import logger as package_logger
from formstate.logging import configure_logging, get_logger
from formstate.settings import Settings


def test_stdlib_logger_is_configured(capsys) -> None:
    configure_logging(settings=Settings(log_json=False, log_level="INFO"), force=True)
    logger = get_logger("tests")
    logger.info("hello")

    captured = capsys.readouterr()
    assert "hello" in captured.err.lower()


def test_bound_context_and_paths_are_rendered(capsys) -> None:
    configure_logging(settings=Settings(log_json=True, log_level="DEBUG"), force=True)
    logger = get_logger("tests", form_id="f1")
    logger.debug("Created field", path=("rows", 0))

    captured = capsys.readouterr()
    assert '"form_id": "f1"' in captured.err
    assert '"path": ["rows", 0]' in captured.err
    configure_logging(settings=Settings(log_json=True, log_level="WARNING"), force=True)


def test_package_logger_created_on_import() -> None:
    assert callable(getattr(package_logger, "info", None))
