"""Library settings and configuration.

This module provides Pydantic settings classes loaded from environment
variables (prefix ``AGENTSEA_``) with support for nested configuration.
"""

import logging

import pydantic_settings
from pydantic import BaseModel, Field, field_validator

from agentsea.platform.agent.config import DEFAULT_MAX_ITERATIONS, AgentConfig


class LoggingSettings(BaseModel):
    level: str = Field("INFO")
    json_output: bool = Field(True, description="True=JSON, False=colored console")

    @field_validator("level")
    @classmethod
    def _validate_level(cls, v):
        v_upper = v.upper()
        if v_upper not in logging._nameToLevel:
            raise ValueError(f'invalid value "{v}"')
        return v_upper


class AgentDefaultsSettings(BaseModel):
    """Defaults applied when building agent configurations from settings.

    Attributes:
        max_iterations: Maximum provider calls per agent invocation
        temperature: Default sampling temperature
    """

    max_iterations: int = Field(DEFAULT_MAX_ITERATIONS, ge=1)
    temperature: float = Field(0.7, ge=0.0, le=2.0)


class LitellmSettings(BaseModel):
    api_base: str | None = None
    api_key: str | None = None
    default_model: str = Field("gpt-4o-mini")


class Settings(pydantic_settings.BaseSettings):
    model_config = pydantic_settings.SettingsConfigDict(
        env_prefix="AGENTSEA_",
        env_nested_delimiter="__",
    )

    logging: LoggingSettings = LoggingSettings()
    agent_defaults: AgentDefaultsSettings = AgentDefaultsSettings()
    litellm: LitellmSettings = LitellmSettings()

    def agent_config(self, name: str, model: str | None = None, **overrides) -> AgentConfig:
        """Build an AgentConfig filled in with the configured defaults.

        Args:
            name: Agent name
            model: Model identifier, defaults to litellm.default_model
            **overrides: Any other AgentConfig field

        Returns:
            AgentConfig for the agent
        """
        overrides.setdefault("max_iterations", self.agent_defaults.max_iterations)
        overrides.setdefault("temperature", self.agent_defaults.temperature)
        return AgentConfig(name=name, model=model or self.litellm.default_model, **overrides)
