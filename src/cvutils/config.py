# Copyright (c) 2020-2023, Andrea Zoppi.
# All rights reserved.
#
# Redistribution and use in source and binary forms, with or without
# modification, are permitted provided that the following conditions are met:
#
# 1. Redistributions of source code must retain the above copyright notice,
#    this list of conditions and the following disclaimer.
#
# 2. Redistributions in binary form must reproduce the above copyright
#    notice, this list of conditions and the following disclaimer in the
#    documentation and/or other materials provided with the distribution.
#
# THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS"
# AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE
# IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE
# ARE DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDER OR CONTRIBUTORS BE
# LIABLE FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR
# CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT LIMITED TO, PROCUREMENT OF
# SUBSTITUTE GOODS OR SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS
# INTERRUPTION) HOWEVER CAUSED AND ON ANY THEORY OF LIABILITY, WHETHER IN
# CONTRACT, STRICT LIABILITY, OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE)
# ARISING IN ANY WAY OUT OF THE USE OF THIS SOFTWARE, EVEN IF ADVISED OF THE
# POSSIBILITY OF SUCH DAMAGE.

r"""Runtime configuration, read from the environment."""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

_LOGGER_NAME = 'cvutils'


def _bool_from_env(
    value: Optional[str],
    *,
    default: bool,
) -> bool:

    if value is None:
        return default
    value = value.strip().lower()
    if value in {'1', 'true', 'yes', 'on'}:
        return True
    if value in {'0', 'false', 'no', 'off'}:
        return False
    return default


def _normalise_log_level(
    value: Optional[str],
) -> str:

    if value is None or not value.strip():
        return 'WARNING'
    value = value.strip().upper()
    if not isinstance(logging.getLevelName(value), int):
        raise ValueError(f'Unsupported log level {value!r}')
    return value


@dataclass(frozen=True)
class RuntimeConfig:
    r"""Settings shared by all the containers.

    Attributes:
        log_level (str):
            Level name of the ``cvutils`` logger.

        check_invariants (bool):
            Sorted tables verify the ordering around each insertion.
    """

    log_level: str
    check_invariants: bool


def _configure_logging(
    level: str,
) -> None:

    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setLevel(level)
        formatter = logging.Formatter('%(levelname)s %(name)s: %(message)s')
        handler.setFormatter(formatter)
        logger.addHandler(handler)


@lru_cache(maxsize=None)
def runtime_config() -> RuntimeConfig:
    log_level = _normalise_log_level(os.getenv('CVUTILS_LOG_LEVEL'))
    check_invariants = _bool_from_env(os.getenv('CVUTILS_CHECK_INVARIANTS'), default=False)

    config = RuntimeConfig(
        log_level=log_level,
        check_invariants=check_invariants,
    )
    _configure_logging(config.log_level)
    return config


def reset_runtime_config_cache() -> None:
    runtime_config.cache_clear()
