"""Environment-based credential discovery.

Tokens come from the environment, optionally primed from a ``.env`` file
via python-dotenv. Existing environment variables always win over values
in the file.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from .logging import get_logger

TOKEN_VARIABLES = (
    "ISSUEIMPORTER_GITHUB_TOKEN",
    "GITHUB_TOKEN",
    "GH_TOKEN",
    "GITHUB_ACCESS_TOKEN",
    "GITHUB_PAT",
)


@dataclass
class EnvAuthConfig:
    """Configuration for environment-based authentication."""

    load_dotenv: bool = True
    dotenv_path: str | None = None
    token_variables: tuple[str, ...] = field(default=TOKEN_VARIABLES)


class EnvironmentAuthManager:
    """Resolves the GitHub token from explicit input, environment and .env files."""

    def __init__(self, config: EnvAuthConfig):
        self.config = config
        self.logger = get_logger()
        self.dotenv_file: Path | None = None
        if config.load_dotenv:
            self._load_dotenv()

    def _load_dotenv(self) -> None:
        candidates = [self.config.dotenv_path] if self.config.dotenv_path else [".env", ".env.local"]
        for location in candidates:
            env_path = Path(location)
            if env_path.is_file():
                load_dotenv(env_path, override=False)
                self.dotenv_file = env_path
                self.logger.debug(f"Loaded environment variables from {env_path}")
                return

    def get_github_token(self, explicit: str | None = None) -> str | None:
        if explicit and explicit.strip():
            return explicit.strip()
        for name in self.config.token_variables:
            raw = os.getenv(name)
            if raw and raw.strip():
                self.logger.debug(f"Found GitHub token in {name}")
                return raw.strip()
        return None

    def get_authentication_recommendations(self) -> list[str]:
        if self.get_github_token():
            return []
        return [
            "Pass --token or set GITHUB_TOKEN in the environment",
            "Or create .env file with GITHUB_TOKEN=your_token",
            "In GitHub Actions: pass secrets.GITHUB_TOKEN with issues: write permission",
        ]


def create_env_auth_manager(config: EnvAuthConfig | None = None) -> EnvironmentAuthManager:
    """Factory function to create environment authentication manager."""
    return EnvironmentAuthManager(config or EnvAuthConfig())


__all__ = [
    "TOKEN_VARIABLES",
    "EnvAuthConfig",
    "EnvironmentAuthManager",
    "create_env_auth_manager",
]
