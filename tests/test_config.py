"""Unit tests for Settings"""

from storefront.core.config import Settings


class TestSettings:

    def test_api_url_joins_base_and_prefix(self):
        settings = Settings(api_base_url="https://catalog.example.test/", api_prefix="/api/v1")

        assert settings.api_url == "https://catalog.example.test/api/v1"

    def test_plant_id_overrides_skip_unset(self):
        settings = Settings(bitumen_plant_id="plant-b", gabion_plant_id=None, construct_plant_id="")

        assert settings.plant_id_overrides() == {"bitumen": "plant-b"}

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("PAGE_SIZE", "25")
        monkeypatch.setenv("WHATSAPP_NUMBER", "9000000000")

        settings = Settings()

        assert settings.page_size == 25
        assert settings.whatsapp_number == "9000000000"
