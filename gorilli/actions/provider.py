"""
Coinbase AgentKit integration.

Exposes the gorilli actions as an AgentKit ActionProvider:

    from gorilli.actions.provider import gorilli_action_provider
    from gorilli.wallet_provider import create_wallet_provider

    provider = gorilli_action_provider()
    actions = provider.get_actions(create_wallet_provider())

AgentKit advertises each action as GorilliActionProvider_<method>, so the
methods carry the registry names.

The wallet handed to the trade and vault actions must offer create_trade and
invoke_contract, as gorilli.wallet_provider.WalletProvider does.
"""

from typing import Any, Dict

from coinbase_agentkit import ActionProvider, create_action
from coinbase_agentkit.network import Network

from gorilli.actions import get_action
from gorilli.actions.create_vault import CREATE_VAULT_PROMPT
from gorilli.actions.schemas import (
    CreateVaultInput,
    GorilliMemeTradeInput,
    GorilliTradeInput,
    VaultActionInput,
)
from gorilli.actions.trade import GORILLI_TRADE_PROMPT
from gorilli.actions.trade_meme import MEME_TRADE_PROMPT
from gorilli.actions.vault_interaction import VAULT_INTERACTION_PROMPT


class GorilliActionProvider(ActionProvider):
    """ERC-4626 vault and trading actions for EVM networks."""

    def __init__(self):
        super().__init__("gorilli", [])

    @create_action(
        name="gorilli_create_erc4626_vault",
        description=CREATE_VAULT_PROMPT,
        schema=CreateVaultInput,
    )
    def gorilli_create_erc4626_vault(self, args: Dict[str, Any]) -> str:
        return get_action("gorilli_create_erc4626_vault").invoke(None, args)

    @create_action(
        name="gorilli_trade",
        description=GORILLI_TRADE_PROMPT,
        schema=GorilliTradeInput,
    )
    def gorilli_trade(self, wallet_provider, args: Dict[str, Any]) -> str:
        return get_action("gorilli_trade").invoke(wallet_provider, args)

    @create_action(
        name="gorilli_trade_meme",
        description=MEME_TRADE_PROMPT,
        schema=GorilliMemeTradeInput,
    )
    def gorilli_trade_meme(self, wallet_provider, args: Dict[str, Any]) -> str:
        return get_action("gorilli_trade_meme").invoke(wallet_provider, args)

    @create_action(
        name="vault_interaction",
        description=VAULT_INTERACTION_PROMPT,
        schema=VaultActionInput,
    )
    def vault_interaction(self, wallet_provider, args: Dict[str, Any]) -> str:
        return get_action("vault_interaction").invoke(wallet_provider, args)

    def supports_network(self, network: Network) -> bool:
        return network.protocol_family == "evm"


def gorilli_action_provider() -> GorilliActionProvider:
    return GorilliActionProvider()
