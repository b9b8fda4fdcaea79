"""Application configuration for setup-docker-action."""

from typing import Annotated

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)
from safir.logging import LogLevel, Profile, configure_logging

from .constants import (
    DEFAULT_REGCTL_VERSION,
    DEFAULT_UNDOCK_VERSION,
    ENV_PREFIX,
    ROOT_LOGGER,
)

__all__ = ["Config"]


class Config(BaseSettings):
    """Configuration for the action that does not come from action inputs.

    Everything here is read from the environment of the runner.  Unlike
    action inputs, these settings are not declared in the action metadata.
    """

    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX, extra="ignore")

    debug: Annotated[
        bool,
        Field(
            title="Show debug output",
            description=(
                "Set by the runner when step debug logging is enabled. If"
                " True, the log level is forced to debug."
            ),
            validation_alias=AliasChoices(
                "RUNNER_DEBUG", ENV_PREFIX + "DEBUG"
            ),
        ),
    ] = False

    log_level: Annotated[
        LogLevel,
        Field(
            title="Log level",
            validation_alias=AliasChoices(ENV_PREFIX + "LOG_LEVEL"),
        ),
    ] = LogLevel.INFO

    log_profile: Annotated[
        Profile,
        Field(
            title="Logging profile",
            description=(
                "The runner log is read by people, so the development profile"
                " is the default"
            ),
            validation_alias=AliasChoices(ENV_PREFIX + "LOG_PROFILE"),
        ),
    ] = Profile.development

    regctl_version: Annotated[
        str,
        Field(
            title="regctl version",
            description="Version of regctl installed for image sources",
            validation_alias=AliasChoices("REGCTL_VERSION"),
        ),
    ] = DEFAULT_REGCTL_VERSION

    undock_version: Annotated[
        str,
        Field(
            title="undock version",
            description="Version of undock installed for image sources",
            validation_alias=AliasChoices("UNDOCK_VERSION"),
        ),
    ] = DEFAULT_UNDOCK_VERSION

    toolkit: Annotated[
        str,
        Field(
            title="Toolkit name",
            description=(
                "Name of the entry point, in the ``setup_docker.toolkits``"
                " group, that provides the installer"
            ),
            validation_alias=AliasChoices(ENV_PREFIX + "TOOLKIT"),
        ),
    ] = "docker"

    @field_validator("regctl_version", mode="before")
    @classmethod
    def _default_regctl_version(cls, v: str | None) -> str:
        if v is None or not str(v).strip():
            return DEFAULT_REGCTL_VERSION
        return str(v).strip()

    @field_validator("undock_version", mode="before")
    @classmethod
    def _default_undock_version(cls, v: str | None) -> str:
        if v is None or not str(v).strip():
            return DEFAULT_UNDOCK_VERSION
        return str(v).strip()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Override the sources of settings.

        Deactivate :file:`.env` and secret file support, since the runner
        doesn't use them, and let environment variables override init
        parameters.
        """
        return (env_settings, init_settings)

    def configure_logging(self) -> None:
        """Configure logging based on the action configuration."""
        log_level = LogLevel.DEBUG if self.debug else self.log_level
        configure_logging(
            profile=self.log_profile,
            log_level=log_level,
            name=ROOT_LOGGER,
        )
