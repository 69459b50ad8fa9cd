"""FieldMaskSettings — the one settings object the service layer takes.

Sources, highest priority first: keyword overrides, ``FIELDMASK_*`` env
vars (``__`` between section and key), the discovered config file, code
defaults. The file is read with pydantic-settings' own TOML sources: a
``pyproject.toml`` contributes only its ``[tool.fieldmask]`` table.
"""

from __future__ import annotations

from contextvars import ContextVar
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    PyprojectTomlConfigSettingsSource,
    TomlConfigSettingsSource,
)

from fieldmask.config.discovery import PYPROJECT_FILENAME, PYPROJECT_TABLE, find_config
from fieldmask.config.models import LoggingConfig, MaskConfig

# Config file chosen by load(); sources are built inside the constructor.
_config_file: ContextVar[Path | None] = ContextVar("_config_file", default=None)


class FieldMaskSettings(BaseSettings):
    """Frozen settings for :class:`~fieldmask.services.projection.ProjectionService`.

    Attributes:
        root: Directory the configuration was resolved against (parent of
            the config file, or CWD if none was found).
        config_path: The config file in effect, or None.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "FIELDMASK_",
        "env_nested_delimiter": "__",
        "pyproject_toml_table_header": PYPROJECT_TABLE,
    }

    root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    mask: MaskConfig = Field(default_factory=MaskConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        path = _config_file.get()
        if path is None:
            return init_settings, env_settings
        if path.name == PYPROJECT_FILENAME:
            file_source: PydanticBaseSettingsSource = PyprojectTomlConfigSettingsSource(
                settings_cls, toml_file=path
            )
        else:
            file_source = TomlConfigSettingsSource(settings_cls, toml_file=path)
        return init_settings, env_settings, file_source

    @classmethod
    def load(
        cls,
        *,
        config_path: str | Path | None = None,
        root: Path | None = None,
        **overrides: Any,
    ) -> FieldMaskSettings:
        """Resolve the config file and build settings.

        An explicit *config_path* skips discovery (a missing file means
        defaults); otherwise the walk-up starts at *root* (default: cwd).
        """
        if config_path:
            path: Path | None = Path(config_path)
            if not path.is_file():
                path = None
        else:
            path = find_config(root)

        if root is None:
            root = path.parent if path else Path.cwd()

        token = _config_file.set(path)
        try:
            return cls(root=root, config_path=path, **overrides)
        finally:
            _config_file.reset(token)
