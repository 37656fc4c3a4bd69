"""
Configuration management using Pydantic Settings.

Provides type-safe access to:
- Remote exchange settings (SFTP host, credentials, inbound/outbound directories)
  loaded from environment variables and .env
- Code lookup tables (note codes, carrier service levels) loaded from
  config/codes.yaml
"""

from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional
import yaml
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from edi_exchange.validators import validate_remote_dir


class CodeTablesConfig(BaseSettings):
    """
    Code lookup tables automatically loaded from config/codes.yaml.

    Trading partners send short codes for notes and carrier service levels;
    these tables map each code to its human-readable description. Both are
    read-only mappings shared by every caller of get_code_tables().

    Attributes:
        note_codes: Note type code → description (e.g., 'GEN' → 'General Note')
        carrier_service_levels: Service level code → description
            (e.g., 'SE' → 'Second Day')

    Example:
        >>> tables = CodeTablesConfig()
        >>> tables.note_codes['GEN']
        'General Note'
        >>> tables.describe_service_level('ZZ')
        '[Not Specified]'
    """

    note_codes: Mapping[str, str] = Field(
        default_factory=dict,
        validate_default=True,
        description="Note type codes with descriptions"
    )
    carrier_service_levels: Mapping[str, str] = Field(
        default_factory=dict,
        validate_default=True,
        description="Carrier service level codes with descriptions"
    )

    model_config = SettingsConfigDict(
        extra='ignore',
        frozen=True
    )

    @field_validator('note_codes', 'carrier_service_levels')
    @classmethod
    def freeze_table(cls, table: Mapping[str, str]) -> Mapping[str, str]:
        """Store a private read-only copy; writes raise TypeError."""
        return MappingProxyType(dict(table))

    @model_validator(mode='before')
    @classmethod
    def load_yaml_config(cls, data: dict) -> dict:
        """
        Load tables from config/codes.yaml if not already provided.

        Runs before field validation; explicit values (e.g., from tests)
        are left untouched.
        """
        if data:
            return data

        config_path = _find_config_file('codes.yaml')

        with open(config_path, 'r', encoding='utf-8') as f:
            yaml_data = yaml.safe_load(f) or {}

        return {
            'note_codes': yaml_data.get('note_codes', {}),
            'carrier_service_levels': yaml_data.get('carrier_service_levels', {})
        }

    def describe_note(self, code: str) -> str:
        """Description for a note code, 'N/A' when unknown."""
        return self.note_codes.get(code, 'N/A')

    def describe_service_level(self, code: str) -> str:
        """Description for a carrier service level code, '[Not Specified]' when unknown."""
        return self.carrier_service_levels.get(code, '[Not Specified]')


def _find_config_file(name: str) -> Path:
    """
    Locate a file under config/, searching the project root first and the
    current working directory second.

    Raises:
        FileNotFoundError: If the file exists in neither location
    """
    project_root = Path(__file__).parent.parent.parent  # src/edi_exchange/config.py -> root
    config_path = project_root / 'config' / name

    if not config_path.exists():
        config_path = Path('config') / name

    if not config_path.exists():
        raise FileNotFoundError(
            f"Config file not found at {config_path}. "
            f"Ensure config/{name} exists in project root."
        )
    return config_path


# Singleton pattern - loaded once, cached forever
_code_tables: Optional[CodeTablesConfig] = None


def get_code_tables() -> CodeTablesConfig:
    """
    Get global code tables instance (lazy-loaded singleton).

    Returns:
        Singleton CodeTablesConfig instance

    Example:
        >>> tables = get_code_tables()
        >>> tables is get_code_tables()
        True
    """
    global _code_tables
    if _code_tables is None:
        _code_tables = CodeTablesConfig()
    return _code_tables


class ExchangeSettings(BaseSettings):
    """
    Remote exchange configuration loaded from environment variables.

    Environment Variables (from .env):
        EDI_HOST: SFTP host name
        EDI_PORT: SFTP port (default 22)
        EDI_USERNAME: Login user
        EDI_PASSWORD: Login password
        EDI_INBOUND_DIR: Remote directory polled for new documents
        EDI_OUTBOUND_DIR: Remote directory documents are uploaded to
        EDI_TIMEOUT: Socket timeout in seconds handed to the transport
        EDI_KNOWN_HOSTS: known_hosts file holding the server key to verify

    Example:
        >>> settings = get_settings()
        >>> settings.inbound_dir
        'in'
    """

    host: str = Field(
        default="localhost",
        description="Remote SFTP host"
    )

    port: int = Field(
        default=22,
        ge=1,
        le=65535,
        description="Remote SFTP port"
    )

    username: Optional[str] = Field(
        default=None,
        description="Login user for the remote channel"
    )

    password: Optional[str] = Field(
        default=None,
        description="Login password for the remote channel"
    )

    inbound_dir: str = Field(
        default="in",
        description="Remote directory polled for incoming documents"
    )

    outbound_dir: str = Field(
        default="out",
        description="Remote directory outgoing documents are written to"
    )

    timeout: float = Field(
        default=30.0,
        gt=0,
        description="Transport socket timeout in seconds"
    )

    known_hosts: Optional[str] = Field(
        default=None,
        description="known_hosts file used to verify the server key (unverified when unset)"
    )

    model_config = SettingsConfigDict(
        env_prefix='EDI_',
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore'
    )

    _validate_inbound_dir = field_validator('inbound_dir')(validate_remote_dir)
    _validate_outbound_dir = field_validator('outbound_dir')(validate_remote_dir)


# Singleton pattern - loaded once, cached forever
_settings: Optional[ExchangeSettings] = None


def get_settings() -> ExchangeSettings:
    """
    Get global exchange settings instance (lazy-loaded singleton).

    Settings are loaded from environment variables and .env file and
    cached after first access.
    """
    global _settings
    if _settings is None:
        _settings = ExchangeSettings()
    return _settings
