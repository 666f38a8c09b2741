from ghroute.core.settings import Settings


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.POST_REQUEST is True
    assert settings.NAVIGATION_PROFILES["walking"] == "foot"


def test_comma_separated_values(monkeypatch):
    monkeypatch.setenv("ALLOWED_ORIGINS", "http://a.example, http://b.example")
    monkeypatch.setenv("NAVIGATION_PROFILES", "driving=truck,cycling=racingbike")
    monkeypatch.setenv("SUPPORTED_LOCALES", '["de", "fr"]')
    settings = Settings(_env_file=None)
    assert settings.ALLOWED_ORIGINS == ["http://a.example", "http://b.example"]
    assert settings.NAVIGATION_PROFILES == {"driving": "truck", "cycling": "racingbike"}
    assert settings.SUPPORTED_LOCALES == ["de", "fr"]
