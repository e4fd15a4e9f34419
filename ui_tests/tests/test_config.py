"""Configuration layer tests (.env parsing, precedence, target profiles).

Run with: pytest ui_tests/tests/test_config.py -v
"""
from vivastreet_e2e import env_defaults
from vivastreet_e2e.config import UiTargetProfile, settings


class TestEnvFiles:
    def test_parse_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text(
            "# comment\n"
            "UI_BASE_URL=https://staging.example.test\n"
            "TEST_EMAIL_VALID=\"someone@example.test\"\n"
            "EMPTY=\n"
            "not a setting\n",
            encoding="utf-8",
        )
        assert env_defaults._parse_env_file(env_file) == {
            "UI_BASE_URL": "https://staging.example.test",
            "TEST_EMAIL_VALID": "someone@example.test",
            "EMPTY": "",
        }

    def test_environment_wins(self, monkeypatch):
        monkeypatch.setenv("UI_ACTION_TIMEOUT_MS", "1234")
        assert env_defaults.get_setting("UI_ACTION_TIMEOUT_MS") == "1234"

    def test_empty_environment_value_falls_through(self, monkeypatch):
        monkeypatch.setenv("SOME_UNKNOWN_SETTING", "")
        assert env_defaults.get_setting("SOME_UNKNOWN_SETTING", "fallback") == "fallback"

    def test_catalogue_is_loaded(self):
        defaults = env_defaults.load_defaults()
        assert "UI_BASE_URL" in defaults
        assert "UI_INTERCEPT_TIMEOUT_S" in defaults


class TestProfiles:
    def test_origin_is_used_as_referer(self):
        profile = UiTargetProfile("staging", "https://staging.example.test/some/path", "https://x.test/api")
        assert profile.origin == "https://staging.example.test/"

    def test_use_profile_is_temporary(self):
        original = settings.profile
        mock = UiTargetProfile("mock", "http://127.0.0.1:5000", "http://127.0.0.1:5000/ajax/regions_tree.php")

        with settings.use_profile(mock) as active:
            assert settings.base_url == "http://127.0.0.1:5000"
            assert settings.search_api_url.endswith("/ajax/regions_tree.php")
            assert settings.referer == "http://127.0.0.1:5000/"
            active.base_url = "http://changed.test"

        assert settings.profile is original
        assert mock.base_url == "http://127.0.0.1:5000"

    def test_url_helper(self):
        mock = UiTargetProfile("mock", "http://127.0.0.1:5000/", "http://127.0.0.1:5000/ajax/regions_tree.php")
        with settings.use_profile(mock):
            assert settings.url("/account_classifieds.php") == "http://127.0.0.1:5000/account_classifieds.php"

    def test_invalid_credentials_are_synthetic(self):
        assert settings.invalid_credentials.email.endswith("@example.com")
        assert "@" not in settings.invalid_credentials.email_incorrect_format
