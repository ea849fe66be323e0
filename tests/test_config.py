"""Tests for environment based configuration."""

from __future__ import annotations

import pytest

from runbox.config import Config

ENV_VARS = [
    "RUNBOX_SCRATCH_ROOT",
    "RUNBOX_TS_TEMPLATE_PATH",
    "RUNBOX_JS_TIMEOUT_SECONDS",
    "RUNBOX_TS_TIMEOUT_SECONDS",
    "RUNBOX_NODE_BIN",
    "RUNBOX_TS_NODE_BIN",
    "RUNBOX_ENABLE_CMD_EXEC",
    "RUNBOX_CMD_EXEC_TIMEOUT_SECONDS",
    "RUNBOX_LOG_LEVEL",
    "PORT",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    config = Config.from_env()
    assert config.scratch_root == "/tmp/runbox"
    assert config.ts_template_path == "/tmp/dummy-pkg-ts"
    assert config.js_timeout_seconds == 60
    assert config.ts_timeout_seconds == 30
    assert config.node_bin == "node"
    assert config.ts_node_bin == "ts-node"
    assert config.enable_cmd_exec is False
    assert config.cmd_exec_timeout_seconds == 10
    assert config.log_level == "INFO"
    assert config.port == 8080


def test_overrides(clean_env):
    clean_env.setenv("RUNBOX_SCRATCH_ROOT", "/mnt/persistent")
    clean_env.setenv("RUNBOX_TS_TIMEOUT_SECONDS", "45")
    clean_env.setenv("RUNBOX_ENABLE_CMD_EXEC", "yes")
    clean_env.setenv("RUNBOX_LOG_LEVEL", "debug")
    clean_env.setenv("PORT", "9000")
    config = Config.load()
    assert config.scratch_root == "/mnt/persistent"
    assert config.ts_timeout_seconds == 45
    assert config.enable_cmd_exec is True
    assert config.log_level == "DEBUG"
    assert config.port == 9000


@pytest.mark.parametrize(
    "name,value",
    [
        ("RUNBOX_JS_TIMEOUT_SECONDS", "soon"),
        ("RUNBOX_TS_TIMEOUT_SECONDS", "0"),
        ("RUNBOX_CMD_EXEC_TIMEOUT_SECONDS", "-1"),
        ("RUNBOX_LOG_LEVEL", "LOUD"),
    ],
)
def test_invalid_values(clean_env, name, value):
    clean_env.setenv(name, value)
    with pytest.raises(ValueError):
        Config.load()
