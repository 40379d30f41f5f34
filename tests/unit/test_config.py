import pytest

from enumkit.config import Settings, get_settings


class TestSettings:
    """
    Target: src/enumkit/config.py
    """

    @pytest.fixture(autouse=True)
    def reset_settings(self):
        get_settings.cache_clear()
        yield
        get_settings.cache_clear()

    def test_tc_config_001_disabled_by_default(self, monkeypatch):
        """TC-CONFIG-001: 環境変数が無ければダンプしない"""
        monkeypatch.delenv("ENUMKIT_DEBUG", raising=False)
        settings = get_settings()

        assert settings.debug is None
        assert settings.should_dump("Color") is False

    def test_tc_config_002_all_targets(self, monkeypatch):
        """TC-CONFIG-002: "1" は全列挙型が対象"""
        monkeypatch.setenv("ENUMKIT_DEBUG", "1")
        settings = get_settings()

        assert settings.should_dump("Color") is True
        assert settings.should_dump("Size") is True

    def test_tc_config_003_named_target(self, monkeypatch):
        """TC-CONFIG-003: それ以外は型名との完全一致"""
        monkeypatch.setenv("ENUMKIT_DEBUG", "Color")
        settings = get_settings()

        assert settings.should_dump("Color") is True
        assert settings.should_dump("color") is False
        assert settings.should_dump("Size") is False

    def test_tc_config_004_cached(self, monkeypatch):
        """TC-CONFIG-004: 設定は初回読み込み後にキャッシュされる"""
        monkeypatch.setenv("ENUMKIT_DEBUG", "Color")
        first = get_settings()
        monkeypatch.setenv("ENUMKIT_DEBUG", "Size")

        assert get_settings() is first
        assert isinstance(first, Settings)
