"""Session configuration and runtime state."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any

import platformdirs
from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from halfwit.core.base import BaseConfig, BaseState
from halfwit.core.log import Logger
from halfwit.core.yaml_settings import YamlWithIncludesSettingsSource

# Modules available for template substitution in YAML files
# Usage: {platformdirs.user_log_dir}, {os.sep}
TEMPLATE_NAMESPACE = {
    'os': os,
    'platformdirs': platformdirs,
    'Path': Path,
}

# ============================================================
# CONFIG MODELS (loaded from YAML/env/CLI)
# ============================================================

class BisectConfig(BaseConfig):
    """How files are backed up and how the test is run."""

    name: str = Field(
        default="session",
        description="Session name, used for log directories",
    )
    backup_dir: Path = Field(
        default=Path(".halfwit"),
        description=(
            "Directory holding copies of all files under bisection. "
            "Wiped at the start of each run."
        ),
    )
    output_dir: Path = Field(
        default=Path("{config.log_root}/tests"),
        description=(
            "Directory for per-test log files "
            "(supports {config.*} templates)"
        ),
    )
    shell: str | None = Field(
        default=None,
        description=(
            "Shell used to run the test command "
            "(default: sh, or powershell.exe on Windows)"
        ),
    )
    timeout: int | None = Field(
        default=None,
        description=(
            "Timeout for one test run in seconds. A test that times "
            "out counts as dominant."
        ),
    )
    verify_baseline: bool = Field(
        default=True,
        description=(
            "Run the test once with every file removed before "
            "searching; it must pass"
        ),
    )
    single_culprit: bool = Field(
        default=False,
        description=(
            "Assume exactly one file is responsible and skip testing "
            "the half that can be inferred"
        ),
    )


class Config(BaseConfig):
    """Application configuration loaded from YAML/env/CLI."""

    logger: Logger = Field(
        default=None,
        description="Logger configuration and runtime instance"
    )
    bisect: BisectConfig = Field(
        default_factory=BisectConfig,
        description="Bisection settings"
    )
    log_level: str = Field(
        default="info",
        alias="log-level",
        description=(
            "Console log level: 'trace', 'debug', 'info', "
            "'warn', 'error', 'fatal'"
        ),
    )
    log_root: Path = Field(
        default_factory=(
            lambda: Path(platformdirs.user_state_dir()) / "halfwit"
        ),
        description=(
            "Root directory for all log files "
            "(supports {platformdirs.*} templates)"
        ),
    )

    model_config = ConfigDict(populate_by_name=True)

    @model_validator(mode='after')
    def _setup_logger(self) -> 'Config':
        """Initialize the global logger once config has loaded."""
        from halfwit.core.log import setup_logger

        if self.logger is None:
            self.logger = Logger(level=self.log_level)

        setup_logger(
            log_root=self.log_root,
            session_name=self.bisect.name,
            console=self.logger.console,
            otlp=self.logger.otlp,
            file=self.logger.file,
            logfire=self.logger.logfire,
        )

        from halfwit.core.yaml_settings import _cleanup_bootstrap_logger
        _cleanup_bootstrap_logger()

        return self

    def close(self):
        """Close config and the global logger singleton."""
        from halfwit.core.log import logger
        logger.close()

        super().close()


# ============================================================
# RUNTIME STATE MODELS (mutable during workflow execution)
# ============================================================

class BisectState(BaseState):
    """Bisection workflow runtime state."""

    files: list[Path] = Field(
        default_factory=list,
        description="Resolved files under bisection, in order",
    )
    manifest: Any = Field(
        default=None,
        description="Manifest holding the file backups",
    )
    bisection: Any = Field(
        default=None,
        description="Active Bisection over the tracked files",
    )
    test_runner: Any = Field(
        default=None,
        description="TestRunner bound to the test command",
    )
    command: str = Field(
        default="",
        description="Test command for this run",
    )
    culprits: list[Path] = Field(
        default_factory=list,
        description="Files confirmed dominant",
    )
    status: str = Field(
        default="pending",
        description="Workflow status: pending, running, complete, failed",
    )

    model_config = ConfigDict(arbitrary_types_allowed=True)


class Runtime(BaseModel):
    """All runtime state organized by workflow."""

    bisect: BisectState = Field(
        default_factory=BisectState,
        description="Bisection workflow runtime state"
    )


# ============================================================
# SESSION (config + runtime combined)
# ============================================================

class Session(BaseSettings):
    """Complete application state: configuration and runtime.

    This is the object that flows through the workflow graph.
    config is loaded from YAML/env/CLI and not changed afterwards;
    runtime is mutated as the bisection proceeds.
    """

    config: Config = Field(
        default_factory=Config,
        description="Application configuration (from YAML/env/CLI)"
    )
    runtime: Runtime = Field(
        default_factory=Runtime,
        description="Runtime state (mutates during workflow execution)",
    )
    include: list[str] | None = Field(
        default=None,
        description=(
            "Additional YAML files to include and merge. "
            "Use --include on CLI or include: in YAML files."
        ),
    )

    model_config = SettingsConfigDict(
        yaml_file="halfwit.yaml",
        env_file=".env",
        env_prefix="HALFWIT_",
        env_nested_delimiter="__",
        cli_implicit_flags=True,
        cli_use_class_docs_for_groups=True,
        arbitrary_types_allowed=True,
        extra='ignore'
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Priority: init args > environment > .env > YAML files >
        file secrets."""
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlWithIncludesSettingsSource(settings_cls),
            file_secret_settings,
        )

    @model_validator(mode="after")
    def substitute_templates(self) -> "Session":
        """Replace {config.*} style templates in every string and
        Path field."""
        self._substitute_recursive(self)
        return self

    def _substitute_recursive(self, obj: Any) -> None:
        if isinstance(obj, BaseModel):
            for field_name in obj.__class__.model_fields:
                value = getattr(obj, field_name)
                new_value = self._substitute_value(value)
                if new_value is not value:
                    setattr(obj, field_name, new_value)
        elif isinstance(obj, dict):
            for key in obj:
                obj[key] = self._substitute_value(obj[key])
        elif isinstance(obj, list):
            for i in range(len(obj)):
                obj[i] = self._substitute_value(obj[i])

    def _substitute_value(self, value: Any) -> Any:
        if isinstance(value, str):
            return self._substitute_string(value)
        elif isinstance(value, Path):
            return Path(self._substitute_string(str(value)))
        elif isinstance(value, (BaseModel, dict, list)):
            self._substitute_recursive(value)
            return value
        else:
            return value

    def _substitute_string(self, value: str) -> str:
        """Replace {field.path} templates with field values.

        Examples:
            "{config.log_root}/tests"
            → "/home/user/.local/state/halfwit/tests"
            "{platformdirs.user_log_dir}"
            → "/home/user/.local/state/halfwit/log"

        Unresolvable templates are left unchanged.
        """
        def replace_template(match):
            parts = match.group(1).split(".")

            if parts[0] in TEMPLATE_NAMESPACE:
                obj = TEMPLATE_NAMESPACE[parts[0]]
                parts = parts[1:]
            else:
                obj = self

            try:
                for part in parts:
                    obj = getattr(obj, part)

                if callable(obj):
                    obj = obj('halfwit', appauthor=False)

                return str(obj)
            except (AttributeError, TypeError):
                return match.group(0)

        return re.sub(r'\{([a-zA-Z._]+)\}', replace_template, value)


__all__ = ["Session", "Config", "BisectConfig", "BaseConfig", "BaseState"]
