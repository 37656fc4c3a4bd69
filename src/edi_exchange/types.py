"""
Discovery helper classes for exploring code tables.

Provides user-facing APIs to discover the note codes and carrier service
levels defined in config/codes.yaml.
"""

from typing import Dict
from edi_exchange.config import get_code_tables


class NoteCodes:
    """
    Helper class for discovering note type codes.

    All methods return copies so the shared table cannot be mutated.

    Example:
        >>> NoteCodes.get_description('GEN')
        'General Note'
        >>> NoteCodes.is_valid('XXX')
        False
    """

    @staticmethod
    def list_available() -> Dict[str, str]:
        """List all note codes with descriptions."""
        return dict(get_code_tables().note_codes)

    @staticmethod
    def get_description(code: str) -> str:
        """
        Get the description for a note code.

        Raises:
            ValueError: If code is not found
        """
        tables = get_code_tables()
        if code not in tables.note_codes:
            raise ValueError(f"Unknown note code: {code}")
        return tables.note_codes[code]

    @staticmethod
    def is_valid(code: str) -> bool:
        return code in get_code_tables().note_codes


class CarrierServiceLevels:
    """
    Helper class for discovering carrier service level codes.

    Example:
        >>> CarrierServiceLevels.get_description('SE')
        'Second Day'
        >>> CarrierServiceLevels.list_by_prefix('P')['PB']
        'Priority Mail'
    """

    @staticmethod
    def list_available() -> Dict[str, str]:
        """List all service level codes with descriptions."""
        return dict(get_code_tables().carrier_service_levels)

    @staticmethod
    def list_by_prefix(prefix: str) -> Dict[str, str]:
        """List service levels whose code starts with prefix."""
        levels = get_code_tables().carrier_service_levels
        return {k: v for k, v in levels.items() if k.startswith(prefix)}

    @staticmethod
    def get_description(code: str) -> str:
        """
        Get the description for a service level code.

        Raises:
            ValueError: If code is not found
        """
        tables = get_code_tables()
        if code not in tables.carrier_service_levels:
            raise ValueError(f"Unknown carrier service level: {code}")
        return tables.carrier_service_levels[code]

    @staticmethod
    def is_valid(code: str) -> bool:
        return code in get_code_tables().carrier_service_levels
