"""Tests for configuration loading."""

from config import Config, load_config


class TestConfig:
    """Test settings sources."""

    def test_defaults(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("DATABASE_PATH", raising=False)
        monkeypatch.delenv("DOT", raising=False)
        monkeypatch.delenv("HOST", raising=False)
        monkeypatch.delenv("PORT", raising=False)
        monkeypatch.delenv("LOG_LEVEL", raising=False)

        config = load_config()

        assert config.database_path == "link_shorter.db"
        assert config.host == "0.0.0.0"
        assert config.port == 1566
        assert config.random_path_length == 8
        assert config.log_level == "INFO"

    def test_environment(self, monkeypatch):
        monkeypatch.setenv("DATABASE_PATH", "/tmp/other.db")
        monkeypatch.setenv("PORT", "9000")

        config = Config()

        assert config.database_path == "/tmp/other.db"
        assert config.port == 9000

    def test_dot_selects_env_file(self, monkeypatch, tmp_path):
        env_file = tmp_path / "custom.env"
        env_file.write_text("DATABASE_PATH=from-dot.db\nRANDOM_PATH_LENGTH=12\n")
        monkeypatch.setenv("DOT", str(env_file))
        monkeypatch.delenv("DATABASE_PATH", raising=False)

        config = load_config()

        assert config.database_path == "from-dot.db"
        assert config.random_path_length == 12

    def test_overrides(self, monkeypatch):
        monkeypatch.delenv("DATABASE_PATH", raising=False)

        assert load_config(database_path="x.db").database_path == "x.db"
