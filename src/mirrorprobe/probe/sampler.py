# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Random selection of probe targets."""

from __future__ import annotations

import random
from collections.abc import Sequence
from dataclasses import dataclass

from ..errors import ConfigurationError


@dataclass(frozen=True)
class Target:
    host: str
    path: str


def sample_target(hosts: Sequence[str], paths: Sequence[str], rng: random.Random) -> Target:
    """Draw one (host, path) pair, each uniformly and with replacement."""
    if not hosts:
        raise ConfigurationError("cannot sample a target from an empty host set")
    if not paths:
        raise ConfigurationError("cannot sample a target from an empty file set")
    return Target(host=rng.choice(hosts), path=rng.choice(paths))
