import os

from web3 import Web3

from gorilli.actions.schemas import CreateVaultInput
from gorilli.config import VAULT_DEPLOY_NETWORK, VAULT_DEPLOY_RPC_URL
from gorilli.utils import format_percent, get_logger, load_abi
from gorilli.wallet_provider import WalletProvider

logger = get_logger(__name__)

CREATE_VAULT_PROMPT = """
This tool allows users to create an ERC-4626 vault. ERC-4626 is a tokenized vault standard for yield-bearing assets in DeFi. Use this tool when a user needs to deploy a new vault for managing assets efficiently.
"""

VAULT_ARTIFACT = "ERC4626Vault"


class VaultDeploymentError(RuntimeError):
    pass


def _fee_argument(kind: str, percent: float) -> int:
    # The constructor takes the percentage itself as a uint256
    if not float(percent).is_integer():
        raise ValueError(f"{kind} fee must be a whole percentage, got {format_percent(percent)}")
    return int(percent)


def create_erc4626_vault(args: CreateVaultInput) -> str:
    """Deploy a new ERC-4626 vault signed with the PRIVATE_KEY credential.

    Returns a confirmation message containing the vault address. Any failure
    is raised as VaultDeploymentError.
    """
    try:
        private_key = os.getenv("PRIVATE_KEY")
        if not private_key:
            raise EnvironmentError("PRIVATE_KEY environment variable is not set")

        deposit_fee = _fee_argument("Deposit", args.deposit_fee)
        withdrawal_fee = _fee_argument("Withdrawal", args.withdrawal_fee)

        artifact = load_abi(VAULT_ARTIFACT)
        if not artifact["bytecode"]:
            raise ValueError(f"No bytecode found for {VAULT_ARTIFACT}. Place a compiled artifact in the contracts directory.")

        wallet = WalletProvider(private_key=private_key, network_name=VAULT_DEPLOY_NETWORK, rpc_url=VAULT_DEPLOY_RPC_URL)
        vault_address = wallet.deploy_contract(
            artifact["abi"],
            artifact["bytecode"],
            Web3.to_checksum_address(args.asset_address),
            args.name,
            args.symbol,
            Web3.to_checksum_address(args.fee_recipient),
            deposit_fee,
            withdrawal_fee,
        )
    except Exception as e:
        logger.error(f"Error deploying ERC-4626 vault {args.name}: {e}", exc_info=True)
        raise VaultDeploymentError(f"Failed to deploy ERC-4626 Vault: {e}") from e

    return f"""Successfully deployed ERC-4626 Vault:
      Name: {args.name}
      Symbol: {args.symbol}
      Vault Address: {vault_address}
      Asset Address: {args.asset_address}
      Fee Recipient: {args.fee_recipient}
      Deposit Fee: {format_percent(args.deposit_fee)}%
      Withdrawal Fee: {format_percent(args.withdrawal_fee)}%"""
