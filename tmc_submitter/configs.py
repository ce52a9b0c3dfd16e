"""Settings models for the submission client."""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

# Default operational settings
DEFAULT_API_VERSION: int = 8
DEFAULT_CLIENT_NAME: str = "tmc_cli"
DEFAULT_CLIENT_VERSION: str = "1.0.0"
DEFAULT_CONFIG_FILE_NAME: str = ".tmc.json"
DEFAULT_REQUEST_TIMEOUT_SECONDS: int = 30
DEFAULT_GRADING_MAX_WAIT_SECONDS: int = 600  # 10 minutes - Wait for the grading queue
DEFAULT_GRADING_POLL_INTERVAL_SECONDS: int = 2
DEFAULT_SETTINGS_PATH: Path = Path.home() / ".config" / "tmc-cli" / "settings.yml"
SETTINGS_PATH_ENV: str = "TMC_SETTINGS"


class ColorConfig(BaseModel):
    """Colors used when printing test results.

    Attributes:
        testresults_left: Color of passed results.
        testresults_right: Color of failed results.
    """

    testresults_left: str = "green"
    testresults_right: str = "red"


class Settings(BaseModel):
    """Read-only user settings.

    Attributes:
        server_address: Base URL of the grading server.
        username: Logged in user.
        access_token: OAuth access token obtained at login.
        organization: Organization slug of the current course.
        api_version: Current server API version used for URL migration.
        client_name: Client name reported to the server.
        client_version: Client version reported to the server.
        locale: Preferred locale.
        proxy: Optional HTTP(S) proxy URL.
        request_timeout_seconds: Timeout for single HTTP requests.
        grading_max_wait_seconds: Maximum time to wait for a submission to be graded.
        grading_poll_interval_seconds: Interval between grading status checks.
        config_file_name: Name of the course manifest file inside a course directory.
        colors: Result colors.
    """

    server_address: str = "https://tmc.mooc.fi"
    username: str | None = None
    access_token: str | None = None
    organization: str | None = None
    api_version: int = DEFAULT_API_VERSION
    client_name: str = DEFAULT_CLIENT_NAME
    client_version: str = DEFAULT_CLIENT_VERSION
    locale: str = "en"
    proxy: str | None = None
    request_timeout_seconds: int = DEFAULT_REQUEST_TIMEOUT_SECONDS
    grading_max_wait_seconds: int = DEFAULT_GRADING_MAX_WAIT_SECONDS
    grading_poll_interval_seconds: int = Field(default=DEFAULT_GRADING_POLL_INTERVAL_SECONDS, gt=0)
    config_file_name: str = DEFAULT_CONFIG_FILE_NAME
    colors: ColorConfig = Field(default_factory=ColorConfig)

    @property
    def is_logged_in(self) -> bool:
        return bool(self.username and self.access_token)


def default_settings_path() -> Path:
    """Return the settings path, honouring the ``TMC_SETTINGS`` environment variable."""
    override = os.environ.get(SETTINGS_PATH_ENV)
    return Path(override) if override else DEFAULT_SETTINGS_PATH


def load_settings(path: Path | None = None) -> Settings:
    """Load YAML settings and parse into a Settings model.

    Args:
        path: Path to the YAML settings file. Defaults to ``default_settings_path()``.

    Returns:
        Parsed Settings. A missing file yields default settings (not logged in).

    Raises:
        yaml.YAMLError: If YAML is malformed.
        pydantic.ValidationError: If the settings structure is invalid.
    """
    if path is None:
        path = default_settings_path()

    if not path.exists():
        return Settings()

    with open(path) as f:
        yaml_data = yaml.safe_load(f)

    return Settings.model_validate(yaml_data or {})
