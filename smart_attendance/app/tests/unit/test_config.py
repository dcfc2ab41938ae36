# smart_attendance/app/tests/unit/test_config.py

import pytest
from pydantic import ValidationError as SettingsValidationError

from smart_attendance.app.config import (
    DevelopmentSettings,
    ProductionSettings,
    Settings,
    TestingSettings,
    get_settings,
    validate_settings,
)
from smart_attendance.app.services.data_validation import ValidationOptions


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults_match_engine_defaults():
    options = ValidationOptions.from_settings(Settings())
    assert options == ValidationOptions()


def test_validation_tunables_from_environment(monkeypatch):
    monkeypatch.setenv("FUZZY_MATCH_THRESHOLD", "0.8")
    monkeypatch.setenv("FUZZY_MATCH_LIMIT", "5")
    monkeypatch.setenv("DEFAULT_EMAIL_DOMAIN", "@College.AC.IN")
    monkeypatch.setenv("INSTITUTIONAL_EMAIL_MARKERS", "college, ac.in ,")
    monkeypatch.setenv("SEMESTER_WARNING_CEILING", "10")

    options = ValidationOptions.from_settings(Settings())

    assert options.fuzzy_match_threshold == 0.8
    assert options.fuzzy_match_limit == 5
    assert options.default_email_domain == "college.ac.in"
    assert options.institutional_email_markers == ("college", "ac.in")
    assert options.semester_warning_ceiling == 10


def test_threshold_out_of_range(monkeypatch):
    monkeypatch.setenv("FUZZY_MATCH_THRESHOLD", "1.5")
    with pytest.raises(SettingsValidationError):
        Settings()


@pytest.mark.parametrize(
    "environment, expected",
    [
        ("production", ProductionSettings),
        ("testing", TestingSettings),
        ("development", DevelopmentSettings),
    ],
)
def test_get_settings_by_environment(monkeypatch, environment, expected):
    monkeypatch.setenv("ENVIRONMENT", environment)
    assert type(get_settings()) is expected


def test_database_config_carries_schema():
    config = Settings().database_config
    assert config["schema"] == "attendance_system"
    assert config["pool_size"] == 10


def test_validate_settings(monkeypatch):
    assert validate_settings(Settings()) == []

    monkeypatch.setenv("INSTITUTIONAL_EMAIL_MARKERS", " , ")
    monkeypatch.setenv("FUZZY_MATCH_THRESHOLD", "1.0")
    issues = validate_settings(Settings())
    assert len(issues) == 2


@pytest.mark.parametrize(
    "environment, production",
    [("production", True), ("Production ", True), ("development", False)],
)
def test_environment_variable_selects_class_and_field(monkeypatch, environment, production):
    monkeypatch.setenv("ENVIRONMENT", environment)
    settings = get_settings()
    assert settings.is_production is production
    assert isinstance(settings, ProductionSettings) is production


def test_env_alias_is_not_read(monkeypatch):
    monkeypatch.delenv("ENVIRONMENT", raising=False)
    monkeypatch.setenv("ENV", "production")
    settings = get_settings()
    assert not settings.is_production
    assert isinstance(settings, DevelopmentSettings)


def test_log_format_from_environment(monkeypatch):
    monkeypatch.setenv("LOG_FORMAT", "%(levelname)s %(message)s")
    assert Settings().LOG_FORMAT == "%(levelname)s %(message)s"
