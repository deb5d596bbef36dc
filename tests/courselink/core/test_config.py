from pathlib import Path

import pytest

from courselink.core import config


def test_validate_runtime_config_requires_secret_in_production(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, 'APP_ENV', 'production')
    monkeypatch.setattr(config, 'JWT_SECRET_KEY', 'change-me')

    with pytest.raises(RuntimeError):
        config.validate_runtime_config()


def test_validate_runtime_config_rejects_non_positive_slot_resolution(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, 'SLOT_RESOLUTION_MICROSECONDS', 0)

    with pytest.raises(RuntimeError):
        config.validate_runtime_config()


def test_validate_runtime_config_accepts_development_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, 'APP_ENV', 'development')
    monkeypatch.setattr(config, 'SLOT_RESOLUTION_MICROSECONDS', 1_000_000)
    monkeypatch.setattr(config, 'MAX_BOOKING_SLOTS_COUNT', 1000)

    config.validate_runtime_config()


@pytest.mark.parametrize(
    ('value', 'expected'),
    [
        (None, ['http://localhost:4200']),
        ('https://a.example, https://b.example,', ['https://a.example', 'https://b.example']),
    ],
)
def test_get_list_splits_comma_separated_values(value, expected) -> None:
    assert config._get_list(value, ['http://localhost:4200']) == expected


def test_every_setting_is_documented_in_env_example() -> None:
    env_example = Path(__file__).resolve().parents[3] / '.env.example'
    documented = {
        line.split('=', 1)[0]
        for line in env_example.read_text().splitlines()
        if line and not line.startswith('#')
    }
    settings = {name for name in vars(config) if name.isupper()}

    assert settings <= documented


def test_validate_runtime_config_rejects_non_positive_slot_count_cap(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, 'MAX_BOOKING_SLOTS_COUNT', 0)

    with pytest.raises(RuntimeError):
        config.validate_runtime_config()
