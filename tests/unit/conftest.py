"""
Pytest configuration for unit tests.

Provides fixtures shared across unit tests and resets module-level
singletons so settings never leak between tests.
"""

import pytest
from pathlib import Path

import edi_exchange.config as config_module


FIXTURES_DIR = Path(__file__).parent.parent / 'fixtures'


@pytest.fixture(autouse=True, scope="function")
def reset_config_singletons():
    """
    Reset the lazy settings singleton around every test.

    Tests that patch EDI_* environment variables would otherwise see a
    settings object cached by an earlier test.
    """
    config_module._settings = None
    yield
    config_module._settings = None


@pytest.fixture
def purchase_order_xml() -> bytes:
    """Raw bytes of the sample purchase order."""
    return (FIXTURES_DIR / 'purchase_order.xml').read_bytes()


@pytest.fixture
def purchase_order(purchase_order_xml):
    """PurchaseOrder parsed from the sample file."""
    from edi_exchange.documents import PurchaseOrder
    return PurchaseOrder(purchase_order_xml)
