import pytest

from rfp_bid_agent.config import Config


class TestConfig:

    def test_defaults(self, clean_env):
        config = Config(env_file=str(clean_env / "missing.env"))

        assert config.google_api_key == ""
        assert config.model_name == "gemini-1.5-pro"
        assert config.top_n == 3
        assert config.max_workers == 4
        assert config.catalog_path == ""
        assert config.log_level == "INFO"

    def test_environment_overrides(self, clean_env, monkeypatch):
        monkeypatch.setenv("TOP_N", "5")
        monkeypatch.setenv("MAX_WORKERS", "2")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("CATALOG_PATH", "catalog.yaml")

        config = Config(env_file=str(clean_env / "missing.env"))

        assert config.top_n == 5
        assert config.max_workers == 2
        assert config.log_level == "DEBUG"
        assert config.catalog_path == "catalog.yaml"

    def test_env_file(self, clean_env, monkeypatch):
        env_file = clean_env / ".env"
        env_file.write_text("GEMINI_MODEL=gemini-test\n", encoding="utf-8")
        # load_dotenv writes into os.environ; register the variable so it is restored
        monkeypatch.setenv("GEMINI_MODEL", "")
        monkeypatch.delenv("GEMINI_MODEL")

        config = Config(env_file=str(env_file))

        assert config.model_name == "gemini-test"

    def test_validate_requires_api_key(self, clean_env):
        config = Config(env_file=str(clean_env / "missing.env"))
        with pytest.raises(ValueError, match="GOOGLE_API_KEY"):
            config.validate()

    def test_validate_rejects_bad_top_n(self, clean_env, monkeypatch):
        monkeypatch.setenv("GOOGLE_API_KEY", "key")
        monkeypatch.setenv("TOP_N", "0")
        config = Config(env_file=str(clean_env / "missing.env"))
        with pytest.raises(ValueError, match="TOP_N"):
            config.validate()

    def test_to_dict_hides_api_key(self, clean_env, monkeypatch):
        monkeypatch.setenv("GOOGLE_API_KEY", "secret")
        config = Config(env_file=str(clean_env / "missing.env"))

        assert config.validate() is True
        assert "secret" not in config.to_dict().values()
        assert "google_api_key" not in config.to_dict()
