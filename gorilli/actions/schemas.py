"""Input schemas for the gorilli actions.

Each model accepts both snake_case field names and the camelCase names
language models tend to produce, and drops unknown keys.
"""

from decimal import Decimal
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, field_validator

from gorilli.utils import ADDRESS_PATTERN, is_address

VAULT_ACTIONS = (
    "deposit",
    "withdraw",
    "balance",
    "previewDeposit",
    "previewWithdraw",
    "totalAssets",
    "totalSupply",
    "asset",
    "convertToShares",
    "convertToAssets",
    "maxDeposit",
    "maxWithdraw",
)


class _ActionInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


def _check_address(value: str) -> str:
    if not is_address(value):
        raise ValueError("Invalid Ethereum address format")
    return value


def _check_fee(kind: str, value: float) -> float:
    if value < 0:
        raise ValueError(f"{kind} fee cannot be less than 0")
    if value > 100:
        raise ValueError(f"{kind} fee cannot be more than 100")
    return value


class CreateVaultInput(_ActionInput):
    """Instructions for creating an ERC-4626 vault"""

    name: str = Field(..., description="The name of the vault. e.g. 'My DeFi Vault'")
    symbol: str = Field(..., description="The symbol for the vault token. e.g. 'MDV'")
    asset_address: str = Field(..., alias="assetAddress", description="The address of the underlying ERC-20 asset")
    fee_recipient: str = Field(..., alias="feeRecipient", description="The address that will receive fees from the vault.")
    deposit_fee: float = Field(..., alias="depositFee", description="The percentage deposit fee (0-100).")
    withdrawal_fee: float = Field(..., alias="withdrawalFee", description="The percentage withdrawal fee (0-100).")

    @field_validator("asset_address", "fee_recipient")
    @classmethod
    def validate_address(cls, v: str) -> str:
        return _check_address(v)

    @field_validator("deposit_fee")
    @classmethod
    def validate_deposit_fee(cls, v: float) -> float:
        return _check_fee("Deposit", v)

    @field_validator("withdrawal_fee")
    @classmethod
    def validate_withdrawal_fee(cls, v: float) -> float:
        return _check_fee("Withdrawal", v)


class GorilliTradeInput(_ActionInput):
    """Instructions for trading assets"""

    amount: Decimal = Field(..., gt=0, description="The amount of the from asset to trade")
    from_asset_id: str = Field(..., alias="fromAssetId", description="The from asset ID to trade")
    to_asset_id: str = Field(..., alias="toAssetId", description="The to asset ID to receive from the trade")


class TradeAction(str, Enum):
    BUY = "BUY"
    SELL = "SELL"


class GorilliMemeTradeInput(_ActionInput):
    """Instructions for trading in the Gorillionaire vault"""

    action: TradeAction = Field(..., description="Trading action. Must be either 'BUY' or 'SELL'")
    amount_in: str = Field(
        ...,
        alias="amountIn",
        pattern=r"^\d+$",
        description="Amount of input tokens to trade (in base units)",
    )
    slippage_percentage: float = Field(
        ...,
        alias="slippagePercentage",
        ge=0.1,
        le=100,
        description="Maximum allowed slippage percentage (e.g., 1.0 for 1%)",
    )


class VaultActionInput(_ActionInput):
    """Instructions for interacting with an ERC-4626 vault"""

    vault_address: str = Field(
        ...,
        pattern=ADDRESS_PATTERN,
        description="The Ethereum address of the ERC-4626 vault. e.g. '0x1234...'",
    )
    rpc_url: HttpUrl = Field(
        ...,
        description="The RPC endpoint URL for blockchain connection. e.g. 'https://eth-mainnet.g.alchemy.com/v2/YOUR-API-KEY'",
    )
    action: Literal[VAULT_ACTIONS] = Field(
        ...,
        description="The type of vault interaction to perform. e.g. 'deposit', 'withdraw', 'balance'",
    )
    amount: Optional[int] = Field(
        None,
        ge=0,
        description="The amount of tokens to deposit/withdraw (in base units). Required for deposit/withdraw/preview actions.",
    )
    user_address: Optional[str] = Field(
        None,
        pattern=ADDRESS_PATTERN,
        description="The user's wallet address. Required for balance queries and transactions.",
    )
