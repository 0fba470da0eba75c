import pytest

from keypager import InvalidPageRequestError, PaginationSettings, SettingsResolver


class Article:
    class Settings:
        id_field = "_id"
        max_page_size = 250
        collection = "articles"


class Plain:
    pass


class TestSettingsResolver:
    def test_defaults_without_settings(self):
        assert SettingsResolver.resolve(Plain) == PaginationSettings()

    def test_reads_inner_settings(self):
        settings = SettingsResolver.resolve(Article)
        assert settings.id_field == "_id"
        assert settings.max_page_size == 250
        assert settings.default_page_size == 20

    def test_base_settings_overridden(self):
        base = PaginationSettings(default_page_size=5)
        settings = SettingsResolver.resolve(Article, base)
        assert settings.default_page_size == 5
        assert settings.id_field == "_id"

    def test_get_id_field(self):
        assert SettingsResolver.get_id_field(Article) == "_id"
        assert SettingsResolver.get_id_field(Plain) == "id"


class TestPaginationSettings:
    def test_max_below_default_rejected(self):
        with pytest.raises(InvalidPageRequestError):
            PaginationSettings(default_page_size=50, max_page_size=10)

    def test_zero_default_rejected(self):
        with pytest.raises(InvalidPageRequestError):
            PaginationSettings(default_page_size=0)

    def test_empty_id_field_rejected(self):
        with pytest.raises(ValueError):
            PaginationSettings(id_field="")
