from hypothesis import given, strategies as st

from gortail.config import Settings


class TestSettings:
    def test_default_values(self):
        """Defaults reproduce the stock middleware behaviour."""
        settings = Settings()
        assert settings.allowed_prefix == "/api"
        assert settings.separator == "==================="
        assert settings.strict_hex is False

    def test_custom_values(self):
        settings = Settings(allowed_prefix="/v2", separator="---", strict_hex=True)
        assert settings.allowed_prefix == "/v2"
        assert settings.separator == "---"
        assert settings.strict_hex is True

    @given(prefix=st.text(min_size=1, max_size=20))
    def test_any_prefix_is_accepted(self, prefix):
        assert Settings(allowed_prefix=prefix).allowed_prefix == prefix
