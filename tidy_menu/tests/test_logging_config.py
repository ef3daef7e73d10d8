import logging

from tidy_menu.core.logging_config import AccessPathExcludeFilter


def _make_access_record(path: str) -> logging.LogRecord:
    return logging.LogRecord(
        name="uvicorn.access",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg='%s - "%s %s HTTP/%s" %s',
        args=("127.0.0.1", "GET", path, "1.1", 200),
        exc_info=None,
    )


def test_access_log_excludes_configured_paths() -> None:
    access_filter = AccessPathExcludeFilter(["/health"])

    assert access_filter.filter(_make_access_record("/health")) is False
    assert access_filter.filter(_make_access_record("/health?probe=1")) is False
    assert access_filter.filter(_make_access_record("/menu")) is True
