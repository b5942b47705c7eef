import pytest
import tomli_w

from config import Config, get_config_path, load_config


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    """Point PFT_CONFIG at a file in tmp_path and clear env overrides."""
    path = tmp_path / "pft.toml"
    monkeypatch.setenv("PFT_CONFIG", str(path))
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.delenv("JWT_SECRET", raising=False)
    monkeypatch.delenv("PORT", raising=False)
    return path


def _write(path, data):
    with open(path, "wb") as f:
        tomli_w.dump(data, f)


class TestLoadConfig:
    def test_config_path_override(self, config_file):
        assert get_config_path() == config_file

    def test_creates_default_file(self, config_file, tmp_path):
        config = load_config()

        assert config_file.exists()
        assert config.jwt_secret
        assert config.port == 8080
        assert config.db_path == tmp_path / "data" / "pft" / "db" / "pft.db"

    def test_default_secret_is_persisted(self, config_file):
        first = load_config()
        second = load_config()

        assert first.jwt_secret == second.jwt_secret

    def test_reads_sections(self, config_file, tmp_path):
        _write(
            config_file,
            {
                "base_dir": str(tmp_path / "base"),
                "database": {"filename": "other.db"},
                "logging": {"level": "DEBUG"},
                "server": {"host": "0.0.0.0", "port": 9000},
                "auth": {"jwt_secret": "from-file", "token_ttl_hours": 2},
            },
        )

        config = load_config()

        assert config.db_path == tmp_path / "base" / "db" / "other.db"
        assert config.log_level == "DEBUG"
        assert config.host == "0.0.0.0"
        assert config.port == 9000
        assert config.jwt_secret == "from-file"
        assert config.token_ttl_hours == 2
        assert config.bcrypt_rounds == 12

    def test_environment_overrides(self, config_file, monkeypatch):
        _write(config_file, {"auth": {"jwt_secret": "from-file"}})
        monkeypatch.setenv("JWT_SECRET", "from-env")
        monkeypatch.setenv("PORT", "9999")

        config = load_config()

        assert config.jwt_secret == "from-env"
        assert config.port == 9999

    def test_missing_secret_is_an_error(self, config_file):
        _write(config_file, {"server": {"port": 8080}})

        with pytest.raises(ValueError):
            load_config()

    def test_empty_secret_is_an_error(self, config_file):
        _write(config_file, {"auth": {"jwt_secret": ""}})

        with pytest.raises(ValueError):
            load_config()

    def test_secret_from_env_alone_is_enough(self, config_file, monkeypatch):
        _write(config_file, {})
        monkeypatch.setenv("JWT_SECRET", "from-env")

        assert load_config().jwt_secret == "from-env"


def test_default_config_generates_distinct_secrets():
    assert Config.default().jwt_secret != Config.default().jwt_secret
