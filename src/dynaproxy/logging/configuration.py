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
"""Logging setup for dynaproxy's own loggers, driven by ``Config``."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass

import structlog

from dynaproxy.core.config import Config, config_properties
from dynaproxy.kernel.exceptions import ConfigurationError

LIBRARY_LOGGER = "dynaproxy"
AUDIT_LOGGER = "dynaproxy.audit"

_FORMATS = ("console", "json")
_HANDLER_ATTR = "_dynaproxy_handler"


@config_properties(prefix="dynaproxy.logging")
@dataclass(frozen=True)
class LoggingProperties:
    """Settings of the ``dynaproxy.logging`` section.

    Attributes:
        level: Level of the ``dynaproxy`` logger tree (synthesis and
            proxy creation events).
        audit_level: Level of ``dynaproxy.audit``, the logger
            :class:`~dynaproxy.interception.LoggingInterceptor` writes to.
        format: ``console`` or ``json``.
    """

    level: str = "INFO"
    audit_level: str = "INFO"
    format: str = "console"


def configure_logging(config: Config) -> LoggingProperties:
    """Route dynaproxy's structlog events to stdout as configured.

    Only the ``dynaproxy`` logger tree gets a handler; the root logger and
    other libraries are left alone. Calling this again replaces the
    previous handler.

    Raises:
        ConfigurationError: Unknown level name or format.
    """
    properties = config.bind(LoggingProperties)
    fmt = properties.format.lower()
    if fmt not in _FORMATS:
        raise ConfigurationError(
            f"Unknown dynaproxy.logging.format '{properties.format}', expected one of {list(_FORMATS)}",
            context={"format": properties.format},
        )
    level = _level(properties.level, "level")
    audit_level = _level(properties.audit_level, "audit-level")

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if fmt == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    # Module-level loggers must pick up later reconfiguration.
    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    library = logging.getLogger(LIBRARY_LOGGER)
    for handler in [h for h in library.handlers if getattr(h, _HANDLER_ATTR, False)]:
        library.removeHandler(handler)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))
    setattr(handler, _HANDLER_ATTR, True)
    library.addHandler(handler)
    library.setLevel(level)
    logging.getLogger(AUDIT_LOGGER).setLevel(audit_level)

    structlog.get_logger(LIBRARY_LOGGER).debug(
        "logging_configured",
        level=logging.getLevelName(level),
        audit_level=logging.getLevelName(audit_level),
        format=fmt,
    )
    return properties


def _level(name: str, key: str) -> int:
    level = logging.getLevelName(name.upper())
    if not isinstance(level, int):
        raise ConfigurationError(
            f"Unknown dynaproxy.logging.{key} '{name}'",
            context={"key": key, "level": name},
        )
    return level
