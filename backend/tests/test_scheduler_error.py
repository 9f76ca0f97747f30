import pytest
from pydantic import ValidationError

from confsched.core.config import Settings
from confsched.core.exceptions import AppError, ConfigurationError, ReportWriteError, SchedulerError


def test_scheduler_error_structure():
    err = SchedulerError(message="Test error", details={"foo": "bar"})
    assert err.status_code == 400
    assert err.message == "Test error"
    assert err.details == {"foo": "bar"}
    assert isinstance(err, AppError)

def test_app_error_defaults():
    err = AppError("Generic error")
    assert err.status_code == 500
    assert err.details == {}

def test_report_write_error_carries_path():
    err = ReportWriteError("/nowhere/schedule.md", "No such file or directory")
    assert err.status_code == 500
    assert err.details == {"path": "/nowhere/schedule.md"}
    assert "/nowhere/schedule.md" in err.message

def test_configuration_error_is_app_error():
    err = ConfigurationError("bad worker count")
    assert err.status_code == 500
    assert isinstance(err, AppError)

def test_settings_reject_invalid_values():
    with pytest.raises(ValidationError):
        Settings(worker_count=0)
    with pytest.raises(ValidationError):
        Settings(log_level="chatty")
    assert Settings(log_level="debug").log_level == "DEBUG"
