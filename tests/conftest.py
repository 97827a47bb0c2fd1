from unittest.mock import MagicMock

import pytest

ASSET = "0x833589fcd6edb6e08f4c7c32d4f71b54bda02913"
RECIPIENT = "0xf39fd6e51aad88f6f4ce6ab8827279cfffb92266"
VAULT = "0x5fbdb2315678afecb367f032d93f642f64180aa3"
USER = "0x70997970c51812dc3a010c7d01b50e0d17dc79c8"
OWNER = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"


@pytest.fixture
def wallet():
    """A wallet double exposing the calls the actions make."""
    wallet = MagicMock()
    wallet.get_address.return_value = OWNER
    return wallet


@pytest.fixture
def vault_contract(monkeypatch):
    """Replace the JSON-RPC vault handle with a mock contract."""
    contract = MagicMock()
    connect = MagicMock(return_value=contract)
    monkeypatch.setattr("gorilli.actions.vault_interaction.connect_vault", connect)
    contract.connect = connect
    return contract
