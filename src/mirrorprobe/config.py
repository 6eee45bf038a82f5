# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for mirrorprobe."""

import math
import os
from dataclasses import dataclass

from .errors import ConfigurationError
from .version import __version__

DEFAULT_USER_AGENT = f"mirrorprobe/{__version__}"
DEFAULT_PORT = 9129
DEFAULT_PREFIX = "repo"
DEFAULT_HOSTS: tuple[str, ...] = ("localhost",)
DEFAULT_FILES: tuple[str, ...] = (
    "extra/os/x86_64/extra.db",
    "core/os/x86_64/core.db",
    "testing/os/x86_64/testing.db",
    "core/os/x86_64/linux-3.19-1-x86_64.pkg.tar.xz",
    "community/os/x86_64/atop-2.0.2-2-x86_64.pkg.tar.xz",
    "extra/os/x86_64/foo-bar.pkg.tar.xz",
)


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _optional_int_env(name: str, default: int | None) -> int | None:
    try:
        value = os.getenv(name)
        return int(value) if value else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _list_env(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    value = os.getenv(name)
    if value is None:
        return default
    items = tuple(item.strip() for item in value.split(",") if item.strip())
    return items or default


@dataclass
class ProbeSettings:
    """Everything one probing run needs: targets, load shape and transport defaults."""

    hosts: tuple[str, ...] = DEFAULT_HOSTS
    port: int = DEFAULT_PORT
    prefix: str = DEFAULT_PREFIX
    files: tuple[str, ...] = DEFAULT_FILES
    total_requests: int = 3000
    concurrency: int = 3
    timeout: float = 10.0
    user_agent: str = DEFAULT_USER_AGENT
    seed: int | None = None
    fail_on_error: bool = False

    @classmethod
    def from_env(cls) -> "ProbeSettings":
        """Create settings from environment variables (evaluated at call time)."""
        return cls(
            hosts=_list_env("MIRRORPROBE_HOSTS", cls.hosts),
            port=_int_env("MIRRORPROBE_PORT", cls.port),
            prefix=os.getenv("MIRRORPROBE_PREFIX", cls.prefix),
            files=_list_env("MIRRORPROBE_FILES", cls.files),
            total_requests=_int_env("MIRRORPROBE_REQUESTS", cls.total_requests),
            concurrency=_int_env("MIRRORPROBE_CONCURRENCY", cls.concurrency),
            timeout=_float_env("MIRRORPROBE_TIMEOUT", cls.timeout),
            user_agent=os.getenv("MIRRORPROBE_USER_AGENT", cls.user_agent),
            seed=_optional_int_env("MIRRORPROBE_SEED", cls.seed),
            fail_on_error=_bool_env("MIRRORPROBE_FAIL_ON_ERROR", cls.fail_on_error),
        )

    def validate(self) -> "ProbeSettings":
        if not self.hosts:
            raise ConfigurationError("at least one host is required")
        if not self.files:
            raise ConfigurationError("at least one file path is required")
        if not 0 < self.port < 65536:
            raise ConfigurationError(f"invalid port: {self.port}")
        if self.total_requests < 0:
            raise ConfigurationError(f"request count must not be negative: {self.total_requests}")
        if self.concurrency < 1:
            raise ConfigurationError(f"concurrency must be at least 1: {self.concurrency}")
        if not math.isfinite(self.timeout) or self.timeout <= 0:
            raise ConfigurationError(f"timeout must be a positive finite number: {self.timeout}")
        return self


def load_probe_settings() -> ProbeSettings:
    """Load probe settings from environment with the stress-test defaults."""
    return ProbeSettings.from_env()
