from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, cast

import yaml

from .errors import ConfigError
from .github_rest import DEFAULT_API_URL
from .parser import SUPPORTED_FORMATS

DEFAULT_REQUEST_DELAY_MS = 100


@dataclass
class ImporterConfig:
    github_repo: str | None = None
    api_url: str = DEFAULT_API_URL
    source_file: Path | None = None
    file_format: str = 'csv'
    dry_run: bool = False
    request_delay_ms: int = DEFAULT_REQUEST_DELAY_MS
    summary_json: Path | None = None
    # Logging configuration
    logging_json_enabled: bool = False
    logging_level: str = 'INFO'
    # Environment authentication configuration
    env_auth_load_dotenv: bool = True
    env_auth_dotenv_path: str | None = None
    # Telemetry configuration
    telemetry_enabled: bool = False
    telemetry_service_name: str = 'issueimporter'

    @property
    def request_delay_seconds(self) -> float:
        return max(0, self.request_delay_ms) / 1000.0


def _resolve_env_var(value: Any) -> Any:
    """Resolve environment variable if value starts with $."""
    if isinstance(value, str) and value.startswith('$'):
        return os.getenv(value[1:], value)  # Fallback to original if not found
    return value


def normalize_format(value: Any) -> str:
    tag = str(value or '').strip().lower()
    if tag not in SUPPORTED_FORMATS:
        raise ConfigError(f'file format must be either "csv" or "json" (got {value!r})')
    return tag


def load_config(path: str | Path | None = None) -> ImporterConfig:
    """Load ``ImporterConfig`` from YAML; ``None`` yields defaults.

    Relative ``source.file`` / ``output.summary_json`` paths resolve against
    the config file's directory.
    """
    if path is None:
        return ImporterConfig(github_repo=os.getenv('GITHUB_REPOSITORY') or None)
    p = Path(path)
    if not p.exists():
        raise ConfigError(f'Configuration file not found: {p}')
    try:
        raw_any = yaml.safe_load(p.read_text(encoding='utf-8')) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f'Invalid YAML in {p}: {exc}') from exc
    if not isinstance(raw_any, dict):
        raise ConfigError(f'Configuration root must be a mapping: {p}')
    raw = cast(dict[str, Any], raw_any)
    gh = cast(dict[str, Any], raw.get('github', {}) or {})
    src = cast(dict[str, Any], raw.get('source', {}) or {})
    behavior = cast(dict[str, Any], raw.get('behavior', {}) or {})
    out = cast(dict[str, Any], raw.get('output', {}) or {})
    logging_config = cast(dict[str, Any], raw.get('logging', {}) or {})
    env_auth = cast(dict[str, Any], raw.get('environment', {}) or {})
    telemetry = cast(dict[str, Any], raw.get('telemetry', {}) or {})

    source_file = _resolve_env_var(src.get('file'))
    summary_json = _resolve_env_var(out.get('summary_json'))
    try:
        delay_ms = int(behavior.get('request_delay_ms', DEFAULT_REQUEST_DELAY_MS))
    except (TypeError, ValueError) as exc:
        raise ConfigError(f'behavior.request_delay_ms must be an integer: {exc}') from exc

    return ImporterConfig(
        github_repo=_resolve_env_var(gh.get('repo')) or os.getenv('GITHUB_REPOSITORY') or None,
        api_url=_resolve_env_var(gh.get('api_url')) or DEFAULT_API_URL,
        source_file=p.parent / source_file if source_file else None,
        file_format=normalize_format(src.get('format', 'csv')),
        dry_run=bool(behavior.get('dry_run', False)),
        request_delay_ms=delay_ms,
        summary_json=p.parent / summary_json if summary_json else None,
        logging_json_enabled=bool(logging_config.get('json_enabled', False)),
        logging_level=str(logging_config.get('level', 'INFO')),
        env_auth_load_dotenv=bool(env_auth.get('load_dotenv', True)),
        env_auth_dotenv_path=env_auth.get('dotenv_path'),
        telemetry_enabled=bool(telemetry.get('enabled', False)),
        telemetry_service_name=str(telemetry.get('service_name', 'issueimporter')),
    )


__all__ = ['ImporterConfig', 'ConfigError', 'load_config', 'normalize_format']
