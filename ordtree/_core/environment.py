import os
from typing import Any, Optional

from dotenv import find_dotenv
from pydantic import BaseModel, Field, GetCoreSchemaHandler, field_validator
from pydantic_core import CoreSchema, core_schema
from pydantic_settings import BaseSettings, SettingsConfigDict

from ordtree._core.schema import RootPolicy

###################################
# .env File Loading Logic
# 1. An explicit `ENV_PATH` environment variable wins if the file exists.
# 2. Otherwise `find_dotenv()` searches the current and parent directories.
###################################


env_path_from_var = os.getenv('ENV_PATH')
dotenv_path = (
    env_path_from_var
    if env_path_from_var and os.path.exists(env_path_from_var)
    else find_dotenv()
)


class LogLevel(str):
    """Custom type for log levels, ensuring the value is one of the standard levels."""

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> CoreSchema:
        def validate_log_level(v: str) -> str:
            valid_levels = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}
            v_upper = v.upper()
            if v_upper not in valid_levels:
                raise ValueError(f'Log level must be one of: {valid_levels}')
            return v_upper

        return core_schema.no_info_after_validator_function(
            validate_log_level, core_schema.str_schema()
        )


###################################
# Core Configuration Schema
###################################
class OrdtreeConfig(BaseModel):
    """Defines the configuration schema for the ordtree package.
    This class does not load from the environment; it only defines the data shape.
    """

    # Logging Settings
    log_level: LogLevel = Field(
        default='INFO', description='The minimum logging level.'
    )
    log_use_rich: bool = Field(
        default=True, description='Use rich for formatted logging output.'
    )
    log_format_string: Optional[str] = Field(
        default=None, description='A custom format string for the console logger.'
    )
    log_file_path: Optional[str] = Field(
        default=None, description='If set, logs will also be written to this file.'
    )

    # Tree Settings
    tree_root_policy: RootPolicy = Field(
        default=RootPolicy.NOOP,
        description=(
            "Behaviour of add_root on a non-empty tree: 'noop' returns None, "
            "'raise' raises TreeNotEmptyError."
        ),
    )
    tree_display_marker: str = Field(
        default='. ',
        description='Indent marker repeated once per depth level when rendering.',
    )

    @field_validator('tree_root_policy', mode='before')
    @classmethod
    def _coerce_root_policy(cls, v: Any) -> Any:
        if isinstance(v, str) and RootPolicy.has_value(v):
            return RootPolicy.from_str(v)
        return v


###################################
# Settings Initialization
###################################
class AppSettings(BaseSettings, OrdtreeConfig):
    """Application settings that load from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix='',
        case_sensitive=False,
        validate_assignment=True,
        extra='ignore',
        env_file=dotenv_path,
        env_file_encoding='utf-8',
    )


# Global Settings
settings = AppSettings()
