import sys, os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from state import FormState
from network.model import AddressingMode, InterfaceKind, InterfaceSelection

@pytest.fixture
def state():
    return FormState()

@pytest.fixture
def ethernet_auto():
    return InterfaceSelection(kind=InterfaceKind.ETHERNET, enabled=True, priority=100)

@pytest.fixture
def wifi_manual():
    return InterfaceSelection(
        kind=InterfaceKind.WIFI,
        enabled=True,
        mode=AddressingMode.MANUAL,
        address="192.168.0.50/24",
        gateway="192.168.0.1",
        dns="8.8.8.8",
        ssid="home",
        passphrase="secret",
    )

@pytest.fixture
def cellular():
    return InterfaceSelection(kind=InterfaceKind.CELLULAR, enabled=True, priority=200)
