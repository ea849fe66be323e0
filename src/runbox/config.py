"""Configuration loader.

The runbox service reads its configuration from environment variables so
that the same container image can run with different scratch mounts,
runtimes and timeouts.  Reasonable defaults are provided so that local
development works out of the box.

Environment variables:

``RUNBOX_SCRATCH_ROOT``
    Directory under which a fresh workspace is created for every
    execution.  Defaults to ``/tmp/runbox``.  A persistent volume should be
    mounted here in production.

``RUNBOX_TS_TEMPLATE_PATH``
    Template project copied into every TypeScript workspace (it carries the
    ``package.json``/``tsconfig.json`` that ``ts-node`` needs).  Defaults to
    ``/tmp/dummy-pkg-ts``.

``RUNBOX_JS_TIMEOUT_SECONDS`` / ``RUNBOX_TS_TIMEOUT_SECONDS``
    Wall‑clock budget for a single JavaScript / TypeScript run.  Defaults
    are 60 and 30 seconds.

``RUNBOX_NODE_BIN`` / ``RUNBOX_TS_NODE_BIN``
    Runtime binaries, resolved on ``PATH``.  Default ``node`` and
    ``ts-node``.

``RUNBOX_ENABLE_CMD_EXEC``
    If ``true``, the ``/cmdExec`` debug endpoint is served.  Never enable
    this in production.  Defaults to ``false``.

``RUNBOX_CMD_EXEC_TIMEOUT_SECONDS``
    Timeout for the debug endpoint.  Default is 10.

``RUNBOX_LOG_LEVEL``
    Level for the ``runbox`` logger.  Defaults to ``INFO``.

``PORT``
    The port on which the API server listens.  Defaults to 8080.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass


def _parse_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.lower() in {"1", "true", "t", "yes", "y"}


@dataclass
class Config:
    """Centralised configuration object."""

    scratch_root: str
    ts_template_path: str
    js_timeout_seconds: int
    ts_timeout_seconds: int
    node_bin: str
    ts_node_bin: str
    enable_cmd_exec: bool
    cmd_exec_timeout_seconds: int
    log_level: str
    port: int

    @classmethod
    def load(cls) -> "Config":
        scratch_root = os.getenv("RUNBOX_SCRATCH_ROOT", "/tmp/runbox")
        ts_template_path = os.getenv("RUNBOX_TS_TEMPLATE_PATH", "/tmp/dummy-pkg-ts")

        def _int_var(name: str, default: int, positive: bool = False) -> int:
            val = os.getenv(name)
            if val is None:
                return default
            try:
                parsed = int(val)
            except ValueError:
                raise ValueError(f"Invalid integer for {name}: {val}")
            if positive and parsed <= 0:
                raise ValueError(f"{name} must be a positive number of seconds, got {parsed}")
            return parsed

        js_timeout_seconds = _int_var("RUNBOX_JS_TIMEOUT_SECONDS", 60, positive=True)
        ts_timeout_seconds = _int_var("RUNBOX_TS_TIMEOUT_SECONDS", 30, positive=True)
        cmd_exec_timeout_seconds = _int_var("RUNBOX_CMD_EXEC_TIMEOUT_SECONDS", 10, positive=True)
        port = _int_var("PORT", 8080)

        log_level = os.getenv("RUNBOX_LOG_LEVEL", "INFO").upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ValueError(f"Invalid RUNBOX_LOG_LEVEL: {log_level}")

        return cls(
            scratch_root=scratch_root,
            ts_template_path=ts_template_path,
            js_timeout_seconds=js_timeout_seconds,
            ts_timeout_seconds=ts_timeout_seconds,
            node_bin=os.getenv("RUNBOX_NODE_BIN", "node"),
            ts_node_bin=os.getenv("RUNBOX_TS_NODE_BIN", "ts-node"),
            enable_cmd_exec=_parse_bool(os.getenv("RUNBOX_ENABLE_CMD_EXEC"), False),
            cmd_exec_timeout_seconds=cmd_exec_timeout_seconds,
            log_level=log_level,
            port=port,
        )

    @classmethod
    def from_env(cls) -> "Config":
        """
        Alternate constructor used by the API to load configuration.

        This wrapper calls :meth:`load` to construct the configuration.
        It exists to provide a more intuitive name when consumed in
        application code.
        """
        return cls.load()
