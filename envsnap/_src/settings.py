from pathlib import Path
from typing import FrozenSet, Optional

import yaml
from pydantic import Field, ValidationError, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from envsnap._src import constants
from envsnap._src.exceptions import ConfigError


class EnvsnapSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="ENVSNAP_",
        case_sensitive=False,
        extra="ignore",
    )

    platform_core_packages: FrozenSet[str] = Field(
        default=constants.DEFAULT_PLATFORM_CORE_PACKAGES,
        description="Packages that are part of the base install and never restored",
    )
    alternate_registry_packages: FrozenSet[str] = Field(
        default=frozenset(),
        description="Packages not published on the primary index",
    )
    alternate_registry_url: Optional[str] = Field(
        default=None,
        description="Base url holding <name>_<version>.tar.gz archives",
    )
    alternate_registry_template: str = constants.ALTERNATE_REGISTRY_TEMPLATE

    primary_index_url: Optional[str] = Field(
        default=None,
        description="Index to install from instead of pip's configured one",
    )
    build_from_source: bool = True
    install_timeout: Optional[int] = Field(default=None, ge=1)

    remote_host: str = constants.DEFAULT_REMOTE_HOST
    remote_branch: str = constants.DEFAULT_REMOTE_BRANCH

    snapshot_path: str = constants.DEFAULT_SNAPSHOT_FILENAME
    log_level: str = "INFO"

    @classmethod
    def settings_customise_sources(
        cls, settings_cls, init_settings, env_settings, dotenv_settings, file_secret_settings,
    ):
        # environment variables override values loaded from a config file
        return env_settings, init_settings, dotenv_settings, file_secret_settings

    @model_validator(mode="after")
    def _alternate_registry_needs_url(self):
        if self.alternate_registry_packages and not self.alternate_registry_url:
            raise ValueError(
                "alternate_registry_url must be set when alternate_registry_packages is not empty"
            )
        return self


def load_settings(config_file: Optional[str] = None) -> EnvsnapSettings:
    """Load settings from an optional yaml file.

    Environment variables (ENVSNAP_*) take precedence over the file.
    """
    file_values = {}
    if config_file is not None:
        path = Path(config_file)
        if not path.exists():
            raise ConfigError(f"config file '{config_file}' does not exist")
        file_values = yaml.safe_load(path.read_text()) or {}
        if not isinstance(file_values, dict):
            raise ConfigError(f"config file '{config_file}' must contain a mapping")

    try:
        return EnvsnapSettings(**file_values)
    except ValidationError as e:
        raise ConfigError(str(e)) from e
