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

import logging

import pytest

from cvutils import config as cv_config
from cvutils.c import GrowableArray
from cvutils.c import GrowableBuffer
from cvutils.logging import get_logger


def test_logger_respects_runtime_level(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv('CVUTILS_LOG_LEVEL', 'DEBUG')
    cv_config.reset_runtime_config_cache()
    try:
        logger = get_logger('tests.logging')

        assert logger.level == logging.DEBUG
        assert logger.name == 'cvutils.tests.logging'
        assert get_logger().name == 'cvutils'
    finally:
        monkeypatch.delenv('CVUTILS_LOG_LEVEL')
        cv_config.reset_runtime_config_cache()
        get_logger()


def test_package_logger_has_handler():
    cv_config.runtime_config()
    assert logging.getLogger('cvutils').handlers


def test_growth_is_logged(caplog: pytest.LogCaptureFixture):
    with caplog.at_level(logging.DEBUG, logger='cvutils.c'):
        array = GrowableArray()
        array.push('a')
        buffer = GrowableBuffer()
        buffer.cat('abc')
        buffer.extract_owned_storage()

    messages = [record.getMessage() for record in caplog.records]
    assert any('grown from 0 to 1 slots' in message for message in messages)
    assert any('grown from 0 to 3 bytes' in message for message in messages)
    assert any('storage extracted' in message for message in messages)
