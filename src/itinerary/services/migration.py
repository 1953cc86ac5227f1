"""Programmatic alembic upgrades for the locations schema, used by the migrate handler."""

import io
import json
import logging
import os
from pathlib import Path

import boto3
from alembic.config import Config

from alembic import command
from itinerary.config import _reset_config, get_config

logger = logging.getLogger(__name__)

_SECRET_TO_ENV = {
    "username": "AURORA_USER",
    "password": "AURORA_PASSWORD",
    "host": "AURORA_HOST",
    "port": "AURORA_PORT",
    "dbname": "AURORA_DATABASE",
}


def _load_credentials_from_secret(secret_arn: str, region: str) -> None:
    """Export Aurora credentials from Secrets Manager so alembic/env.py sees them."""
    sm = boto3.client("secretsmanager", region_name=region)
    secret = json.loads(sm.get_secret_value(SecretId=secret_arn)["SecretString"])
    for key, env_name in _SECRET_TO_ENV.items():
        if key in secret:
            os.environ[env_name] = str(secret[key])
    # env.py reads the cached config, which predates these variables.
    _reset_config()


def _alembic_config(ini_path: Path) -> Config:
    cfg = Config(str(ini_path))
    cfg.set_main_option("script_location", str(ini_path.parent / "alembic"))
    return cfg


def run_migrations(revision: str = "head") -> dict[str, str]:
    config = get_config()
    if config.aurora_secret_arn:
        _load_credentials_from_secret(config.aurora_secret_arn, config.aws_region)

    cfg = _alembic_config(Path(config.alembic_config))

    captured = io.StringIO()
    capture_handler = logging.StreamHandler(captured)
    alembic_logger = logging.getLogger("alembic")
    alembic_logger.addHandler(capture_handler)

    try:
        command.upgrade(cfg, revision)
    except Exception:
        logger.exception("Upgrade to %s failed", revision)
        raise
    finally:
        alembic_logger.removeHandler(capture_handler)

    output = captured.getvalue()
    logger.info("Upgrade to %s complete: %s", revision, output)
    return {"status": "success", "revision": revision, "output": output}
