"""Telemetry for the buffer-name codec, built on telelog.

Public surface:

``load_settings()`` -- read ``VIM_BUFNAME_*`` environment variables
``configure(...)`` -- adopt settings, a preset, or an explicit ``tl.Config``
``get_logger(name)`` -- fetch (and cache) a configured logger
``span(name, ...)`` -- profile a block and report its outcome
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterator, Mapping, MutableMapping, Optional, Tuple, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "VIM_BUFNAME_"
DEFAULT_LOGGER_NAME = "vim_bufname"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True, slots=True)
class TelemetrySettings:
    """Plain-data view of the telelog configuration this package uses."""

    logger_name: str = DEFAULT_LOGGER_NAME
    level: str = "INFO"
    console: bool = True
    colored: bool = True
    json_format: bool = False
    log_file: str = ""
    buffered: bool = False
    buffer_size: int = 2048

    def __post_init__(self) -> None:
        object.__setattr__(self, "level", self.level.upper())
        if self.buffer_size <= 0:
            raise ValueError("buffer_size must be positive")


PRESETS: Mapping[str, TelemetrySettings] = {
    "development": TelemetrySettings(level="DEBUG", console=True, colored=True),
    "production": TelemetrySettings(
        level="INFO",
        console=False,
        log_file="vim_bufname.log",
        buffered=True,
    ),
    "performance": TelemetrySettings(
        level="DEBUG",
        console=False,
        json_format=True,
        log_file="vim_bufname-performance.log",
        buffered=True,
    ),
}

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None
_ACTIVE_SETTINGS: Optional[TelemetrySettings] = None


def _env(environ: Mapping[str, str], name: str) -> Optional[str]:
    return environ.get(f"{ENV_PREFIX}{name}")


def _env_flag(environ: Mapping[str, str], name: str, default: bool) -> bool:
    raw = _env(environ, name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


def load_settings(environ: Optional[Mapping[str, str]] = None) -> TelemetrySettings:
    """Build settings from ``VIM_BUFNAME_*`` variables (``os.environ`` by default)."""

    env = os.environ if environ is None else environ
    size_raw = _env(env, "LOG_BUFFER_SIZE")
    try:
        buffer_size = int(size_raw) if size_raw else 2048
    except ValueError as exc:
        raise ValueError(
            f"{ENV_PREFIX}LOG_BUFFER_SIZE must be an integer, got {size_raw!r}"
        ) from exc

    return TelemetrySettings(
        logger_name=_env(env, "LOGGER") or DEFAULT_LOGGER_NAME,
        level=_env(env, "LOG_LEVEL") or "INFO",
        console=not _env_flag(env, "DISABLE_CONSOLE", False),
        colored=not _env_flag(env, "NO_COLOR", False),
        json_format=_env_flag(env, "LOG_JSON", False),
        log_file=_env(env, "LOG_FILE") or "",
        buffered=_env_flag(env, "LOG_BUFFERED", False),
        buffer_size=buffer_size,
    )


def resolve_preset(preset: str, environ: Optional[Mapping[str, str]] = None) -> TelemetrySettings:
    key = preset.lower()
    if key == "performance_analysis":
        key = "performance"
    try:
        settings = PRESETS[key]
    except KeyError as exc:
        raise ValueError(f"Unknown preset '{preset}'.") from exc

    env = os.environ if environ is None else environ
    log_file = _env(env, "LOG_FILE")
    if log_file and settings.log_file:
        settings = replace(settings, log_file=log_file)
    return settings


def build_config(settings: TelemetrySettings) -> Any:
    """Translate ``settings`` into a ``telelog.Config``."""

    config = tl.Config()
    config.with_min_level(settings.level)
    config.with_console_output(settings.console)
    if settings.console:
        config.with_colored_output(settings.colored)
    if settings.json_format:
        config.with_json_format(True)
    if settings.log_file:
        config.with_file_output(settings.log_file)
    if settings.buffered:
        config.with_buffering(True)
        config.with_buffer_size(settings.buffer_size)
    # spans rely on logger.profile
    config.with_profiling(True)
    return config


def configure(
    *,
    config: Optional[Any] = None,
    preset: Optional[str] = None,
    settings: Optional[TelemetrySettings] = None,
) -> None:
    """Replace the active telelog configuration.

    At most one of ``config``, ``preset`` and ``settings`` may be given. With
    none of them the configuration is rebuilt from the environment. Cached
    loggers are dropped so the next ``get_logger`` call picks up the change.
    """

    global _ACTIVE_CONFIG, _ACTIVE_SETTINGS
    chosen = [value for value in (config, preset, settings) if value is not None]
    if len(chosen) > 1:
        raise ValueError("Provide only one of `config`, `preset` or `settings`.")

    if config is not None:
        config.with_profiling(True)
    else:
        if preset is not None:
            settings = resolve_preset(preset)
        elif settings is None:
            settings = load_settings()
        config = build_config(settings)

    _ACTIVE_CONFIG = config
    _ACTIVE_SETTINGS = settings
    _LOGGER_CACHE.clear()


def _ensure_config() -> Any:
    if _ACTIVE_CONFIG is None:
        configure()
    return _ACTIVE_CONFIG


def get_logger(name: Optional[str] = None) -> Any:
    """Return a cached ``telelog.Logger`` using the active configuration."""

    config = _ensure_config()
    default_name = (
        _ACTIVE_SETTINGS.logger_name if _ACTIVE_SETTINGS else DEFAULT_LOGGER_NAME
    )
    logger_name = name or default_name
    if logger_name not in _LOGGER_CACHE:
        _LOGGER_CACHE[logger_name] = tl.Logger.with_config(logger_name, config)
    return _LOGGER_CACHE[logger_name]


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list, tuple, set)):
        return repr(value)
    return str(value)


def _pairs(data: Mapping[str, Any]) -> list[tuple[str, str]]:
    return [(str(key), _stringify(value)) for key, value in data.items()]


def _level_method(logger: Any, level: str) -> Tuple[Any, bool]:
    """Return the logger method for ``level`` and whether it takes data pairs."""

    name = str(level).lower()
    with_data = getattr(logger, f"{name}_with", None)
    if with_data is not None:
        return with_data, True
    plain = getattr(logger, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    return plain, False


def _emit(logger: Any, level: str, message: str, payload: Mapping[str, Any]) -> None:
    method, accepts_data = _level_method(logger, level)
    if accepts_data:
        method(message, _pairs(payload))
    else:
        method(f"{message} {dict(payload)}")


@dataclass
class SpanHandle:
    """Handle yielded by ``span`` for attaching outcome metadata."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)

    def _payload(self, extra: Optional[Mapping[str, Any]] = None) -> Dict[str, str]:
        payload = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        for key, value in (extra or {}).items():
            payload[key] = _stringify(value)
        return payload

    def fail(self, reason: str, *, level: str = "error") -> None:
        _emit(self.logger, level, "span::fail", self._payload({"reason": reason}))


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block, optionally tracking it as a telelog component.

    ``component=True`` reuses ``name`` as the component id; a string is used
    verbatim. ``metadata`` seeds the handle; the logger's own context is left
    untouched. Exceptions are
    reported through ``SpanHandle.fail`` (``ValueError``s, i.e. rejected
    input, at warning level) and re-raised unchanged.
    """

    log = get_logger(logger_name)
    if component is True:
        component_name: Optional[str] = name
    elif isinstance(component, str):
        component_name = component
    else:
        component_name = None

    handle = SpanHandle(
        logger=log,
        span_name=name,
        component_name=component_name,
        metadata={key: _stringify(value) for key, value in (metadata or {}).items()},
    )
    with ExitStack() as stack:
        if component_name:
            stack.enter_context(log.track_component(component_name))
        stack.enter_context(log.profile(name))
        try:
            yield handle
        except Exception as exc:
            level = "warning" if isinstance(exc, ValueError) else "error"
            handle.fail(f"{type(exc).__name__}: {exc}", level=level)
            raise


__all__ = [
    "PRESETS",
    "SpanHandle",
    "TelemetrySettings",
    "build_config",
    "configure",
    "get_logger",
    "load_settings",
    "resolve_preset",
    "span",
]
