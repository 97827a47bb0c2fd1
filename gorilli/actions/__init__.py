from typing import List

from gorilli.actions.base import GorilliAction
from gorilli.actions.create_vault import CREATE_VAULT_PROMPT, VaultDeploymentError, create_erc4626_vault
from gorilli.actions.schemas import (
    CreateVaultInput,
    GorilliMemeTradeInput,
    GorilliTradeInput,
    VaultActionInput,
)
from gorilli.actions.trade import GORILLI_TRADE_PROMPT, gorilli_trade
from gorilli.actions.trade_meme import MEME_TRADE_PROMPT, gorilli_meme_trade
from gorilli.actions.vault_interaction import VAULT_INTERACTION_PROMPT
from gorilli.actions.vault_interaction import vault_interaction as interact_with_vault
from gorilli.utils import get_logger

logger = get_logger(__name__)


def get_all_actions() -> List[GorilliAction]:
    """Build every gorilli action.

    New actions must be added here to be discovered.
    """
    actions = [
        GorilliAction(
            name="gorilli_create_erc4626_vault",
            description=CREATE_VAULT_PROMPT,
            args_schema=CreateVaultInput,
            func=create_erc4626_vault,
            needs_wallet=False,
        ),
        GorilliAction(
            name="gorilli_trade",
            description=GORILLI_TRADE_PROMPT,
            args_schema=GorilliTradeInput,
            func=gorilli_trade,
        ),
        GorilliAction(
            name="gorilli_trade_meme",
            description=MEME_TRADE_PROMPT,
            args_schema=GorilliMemeTradeInput,
            func=gorilli_meme_trade,
        ),
        GorilliAction(
            name="vault_interaction",
            description=VAULT_INTERACTION_PROMPT,
            args_schema=VaultActionInput,
            func=interact_with_vault,
        ),
    ]
    logger.debug(f"Retrieved gorilli actions: {[action.name for action in actions]}")
    return actions


GORILLI_ACTIONS = tuple(get_all_actions())

_ACTIONS_BY_NAME = {action.name: action for action in GORILLI_ACTIONS}


def get_action(name: str) -> GorilliAction:
    """Look up a registered action by name. Raises KeyError for unknown names."""
    return _ACTIONS_BY_NAME[name]


__all__ = [
    "GorilliAction",
    "GORILLI_ACTIONS",
    "get_all_actions",
    "get_action",
    "VaultDeploymentError",
    "CreateVaultInput",
    "GorilliTradeInput",
    "GorilliMemeTradeInput",
    "VaultActionInput",
]
