"""Configuration management for PFT.

Reads configuration from ~/.config/pft.toml and creates default config if needed.
A handful of settings can be overridden through the environment.
"""

import os
import secrets
from pathlib import Path
from dataclasses import dataclass
import tomllib
import tomli_w


@dataclass
class Config:
    """Application configuration."""

    base_dir: Path
    db_data_dir: Path
    db_filename: str
    log_level: str
    log_dir: Path
    host: str
    port: int
    jwt_secret: str
    token_ttl_hours: int = 24
    bcrypt_rounds: int = 12

    @property
    def db_path(self) -> Path:
        """Get the full database path (data_dir/filename)."""
        return self.db_data_dir / self.db_filename

    @classmethod
    def default(cls) -> "Config":
        """Create a Config with default values and a freshly generated secret."""
        home = Path.home()
        base_dir = home / "data" / "pft"
        return cls(
            base_dir=base_dir,
            db_data_dir=base_dir / "db",
            db_filename="pft.db",
            log_level="INFO",
            log_dir=base_dir / "logs",
            host="127.0.0.1",
            port=8080,
            jwt_secret=secrets.token_urlsafe(32),
        )


def get_config_path() -> Path:
    """Get the path to the config file.

    PFT_CONFIG points at an alternate file.
    """
    override = os.environ.get("PFT_CONFIG")
    if override:
        return Path(override)
    return Path.home() / ".config" / "pft.toml"


def get_migrations_dir() -> Path:
    """Get the path to the migrations directory.

    This is always relative to the code location, not configurable.
    """
    return Path(__file__).parent / "db" / "migrations"


def load_config() -> Config:
    """Load configuration from file, creating default if it doesn't exist.

    Returns:
        Config object with loaded or default values, after environment overrides.

    Raises:
        ValueError: If no JWT secret is configured.
    """
    config_path = get_config_path()

    # If config doesn't exist, create it with defaults
    if not config_path.exists():
        config = Config.default()
        _write_config(config)
        return _apply_env_overrides(config)

    with open(config_path, "rb") as f:
        data = tomllib.load(f)

    # Parse with defaults for any missing values
    base_dir = Path(data.get("base_dir", Path.home() / "data" / "pft"))

    db_config = data.get("database", {})
    db_data_dir = Path(db_config.get("data_dir", base_dir / "db"))
    db_filename = db_config.get("filename", "pft.db")

    log_config = data.get("logging", {})
    log_level = log_config.get("level", "INFO")
    log_dir = Path(log_config.get("log_dir", base_dir / "logs"))

    server_config = data.get("server", {})
    host = server_config.get("host", "127.0.0.1")
    port = int(server_config.get("port", 8080))

    auth_config = data.get("auth", {})
    jwt_secret = auth_config.get("jwt_secret", "")
    token_ttl_hours = int(auth_config.get("token_ttl_hours", 24))
    bcrypt_rounds = int(auth_config.get("bcrypt_rounds", 12))

    config = Config(
        base_dir=base_dir,
        db_data_dir=db_data_dir,
        db_filename=db_filename,
        log_level=log_level,
        log_dir=log_dir,
        host=host,
        port=port,
        jwt_secret=jwt_secret,
        token_ttl_hours=token_ttl_hours,
        bcrypt_rounds=bcrypt_rounds,
    )
    return _apply_env_overrides(config)


def _apply_env_overrides(config: Config) -> Config:
    """Apply JWT_SECRET and PORT from the environment, then validate."""
    secret = os.environ.get("JWT_SECRET")
    if secret:
        config.jwt_secret = secret

    port = os.environ.get("PORT")
    if port:
        config.port = int(port)

    if not config.jwt_secret:
        raise ValueError(
            "No JWT secret configured: set [auth] jwt_secret or the JWT_SECRET env var"
        )
    return config


def _write_config(config: Config) -> None:
    """Write config to the config file.

    Args:
        config: Config object to write.
    """
    config_path = get_config_path()

    # Ensure config directory exists
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = {
        "base_dir": str(config.base_dir),
        "database": {
            "data_dir": str(config.db_data_dir),
            "filename": config.db_filename,
        },
        "logging": {
            "level": config.log_level,
            "log_dir": str(config.log_dir),
        },
        "server": {
            "host": config.host,
            "port": config.port,
        },
        "auth": {
            "jwt_secret": config.jwt_secret,
            "token_ttl_hours": config.token_ttl_hours,
            "bcrypt_rounds": config.bcrypt_rounds,
        },
    }

    with open(config_path, "wb") as f:
        tomli_w.dump(data, f)
