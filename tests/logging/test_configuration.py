# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Tests for configure_logging — structlog setup of the dynaproxy loggers."""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod

import pytest
import structlog

from dynaproxy.core.config import Config
from dynaproxy.interception import LoggingInterceptor
from dynaproxy.kernel.exceptions import ConfigurationError
from dynaproxy.logging import AUDIT_LOGGER, LIBRARY_LOGGER, LoggingProperties, configure_logging
from dynaproxy.proxy.factory import ProxyFactory
from dynaproxy.testing import EchoInterceptor


class Inventory(ABC):
    @abstractmethod
    def reserve(self, sku: str) -> object: ...


def _logging_config(**section: str) -> Config:
    return Config({"dynaproxy": {"logging": section}})


def _library_handlers() -> list[logging.Handler]:
    return list(logging.getLogger(LIBRARY_LOGGER).handlers)


@pytest.fixture(autouse=True)
def _restore_logging():
    yield
    structlog.reset_defaults()
    for name in (LIBRARY_LOGGER, AUDIT_LOGGER):
        stdlib_logger = logging.getLogger(name)
        stdlib_logger.setLevel(logging.NOTSET)
        for handler in list(stdlib_logger.handlers):
            stdlib_logger.removeHandler(handler)


class TestConfigureLogging:
    def test_defaults(self):
        properties = configure_logging(Config({}))
        assert properties == LoggingProperties()
        assert logging.getLogger(LIBRARY_LOGGER).level == logging.INFO
        assert logging.getLogger(AUDIT_LOGGER).level == logging.INFO
        assert len(_library_handlers()) == 1

    def test_levels_from_section(self):
        configure_logging(_logging_config(**{"level": "debug", "audit-level": "warning"}))
        assert logging.getLogger(LIBRARY_LOGGER).level == logging.DEBUG
        assert logging.getLogger(AUDIT_LOGGER).level == logging.WARNING

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("DYNAPROXY_LOGGING_AUDIT_LEVEL", "ERROR")
        configure_logging(Config({}))
        assert logging.getLogger(AUDIT_LOGGER).level == logging.ERROR

    def test_reconfiguring_replaces_handler(self):
        configure_logging(Config({}))
        configure_logging(_logging_config(format="json"))
        assert len(_library_handlers()) == 1

    def test_root_logger_left_alone(self):
        root_handlers = list(logging.getLogger().handlers)
        configure_logging(Config({}))
        assert logging.getLogger().handlers == root_handlers

    def test_json_output(self, capsys: pytest.CaptureFixture[str]):
        configure_logging(_logging_config(format="JSON"))
        structlog.get_logger("dynaproxy.proxy").info("proxy_created", interface="Inventory")
        line = capsys.readouterr().out.strip().splitlines()[-1]
        event = json.loads(line)
        assert event["event"] == "proxy_created"
        assert event["interface"] == "Inventory"
        assert event["logger"] == "dynaproxy.proxy"

    def test_unknown_format(self):
        with pytest.raises(ConfigurationError, match="dynaproxy.logging.format"):
            configure_logging(_logging_config(format="xml"))

    def test_unknown_level(self):
        with pytest.raises(ConfigurationError, match="dynaproxy.logging.level 'loud'"):
            configure_logging(_logging_config(level="loud"))


class TestAuditLevel:
    def test_audit_events_follow_configured_level(self, capsys: pytest.CaptureFixture[str]):
        configure_logging(_logging_config(**{"format": "json", "audit-level": "warning"}))
        inventory = ProxyFactory(LoggingInterceptor(EchoInterceptor())).create_proxy(Inventory)
        assert inventory.reserve("sku-1") == "sku-1"
        assert "proxy_call" not in capsys.readouterr().out

    def test_audit_events_written_at_info(self, capsys: pytest.CaptureFixture[str]):
        configure_logging(_logging_config(format="json", level="warning"))
        inventory = ProxyFactory(LoggingInterceptor(EchoInterceptor())).create_proxy(Inventory)
        inventory.reserve("sku-2")
        events = [json.loads(line)["event"] for line in capsys.readouterr().out.strip().splitlines()]
        assert events == ["proxy_call", "proxy_call_returned"]


class TestFromConfig:
    def test_logging_section_is_applied(self):
        ProxyFactory.from_config(EchoInterceptor(), _logging_config(level="warning"))
        assert logging.getLogger(LIBRARY_LOGGER).level == logging.WARNING
        assert len(_library_handlers()) == 1

    def test_without_logging_section_nothing_is_configured(self):
        ProxyFactory.from_config(EchoInterceptor(), Config({"dynaproxy": {"proxy": {"type-suffix": "Stub"}}}))
        assert _library_handlers() == []
        assert logging.getLogger(LIBRARY_LOGGER).level == logging.NOTSET
