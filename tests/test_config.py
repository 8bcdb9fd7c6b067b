from pathlib import Path

from pickup_planner.config import Settings


def test_origins_accept_comma_separated_env(monkeypatch):
    monkeypatch.setenv("PICKUP_FRONTEND_ALLOWED_ORIGINS", "https://a.example, https://b.example")

    settings = Settings(_env_file=None)

    assert settings.frontend_allowed_origins == ("https://a.example", "https://b.example")


def test_origins_accept_json_env(monkeypatch):
    monkeypatch.setenv("PICKUP_FRONTEND_ALLOWED_ORIGINS", '["https://a.example"]')

    assert Settings(_env_file=None).frontend_allowed_origins == ("https://a.example",)


def test_paths_are_resolved_and_blank_registry_is_none(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("PICKUP_CUSTOMER_FILE", str(tmp_path / "roster.xlsx"))
    monkeypatch.setenv("PICKUP_NEIGHBORHOODS_FILE", "  ")

    settings = Settings(_env_file=None)

    assert settings.customer_file == (tmp_path / "roster.xlsx").resolve()
    assert settings.neighborhoods_file is None
    assert settings.revenue_per_customer == 5
    assert settings.pickup_enrichment == "random"
