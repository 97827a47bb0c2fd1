from typing import Any, Optional

from web3 import Web3

from gorilli.actions.schemas import VaultActionInput
from gorilli.utils import get_logger, load_abi

logger = get_logger(__name__)

VAULT_INTERACTION_PROMPT = """
This tool enables interaction with ERC-4626 compliant vault contracts, supporting operations like:
- Depositing assets into the vault
- Withdrawing assets from the vault
- Checking balances and previewing conversions
- Querying vault metadata (underlying asset, total assets, total shares, deposit and withdrawal limits)

The vault follows the ERC-4626 tokenized vault standard, ensuring consistent behavior across different implementations.
"""

# action -> (contract function, required input, message when missing, result template)
VAULT_QUERIES = {
    "balance": ("balanceOf", "user", "User address required for balance queries", "User vault share balance: {result}"),
    "previewDeposit": ("previewDeposit", "amount", "Amount required for deposit preview", "Expected shares for deposit: {result}"),
    "previewWithdraw": ("previewWithdraw", "amount", "Amount required for withdrawal preview", "Expected assets for withdrawal: {result}"),
    "totalAssets": ("totalAssets", None, None, "Total assets in vault: {result}"),
    "totalSupply": ("totalSupply", None, None, "Total vault shares in circulation: {result}"),
    "asset": ("asset", None, None, "Underlying asset address: {result}"),
    "convertToShares": ("convertToShares", "amount", "Amount required for share conversion", "Shares for {amount} assets: {result}"),
    "convertToAssets": ("convertToAssets", "amount", "Amount required for asset conversion", "Assets for {amount} shares: {result}"),
    "maxDeposit": ("maxDeposit", "user", "User address required for deposit limit queries", "Maximum deposit for user: {result}"),
    "maxWithdraw": ("maxWithdraw", "user", "User address required for withdrawal limit queries", "Maximum withdrawal for user: {result}"),
}

KNOWN_ERRORS = (
    ("insufficient balance", "Error: Insufficient balance for the requested operation"),
    ("gas required exceeds allowance", "Error: Transaction would fail - gas estimation failed"),
    ("network", "Error: RPC connection failed - please check your connection and try again"),
)


def connect_vault(rpc_url: str, vault_address: str) -> Any:
    """Read-only contract handle for the vault on the given JSON-RPC endpoint."""
    w3 = Web3(Web3.HTTPProvider(rpc_url))
    return w3.eth.contract(address=Web3.to_checksum_address(vault_address), abi=load_abi("ERC4626")["abi"])


def vault_interaction(wallet, args: VaultActionInput) -> str:
    """Interact with an ERC-4626 vault.

    Deposits and withdrawals are signed by `wallet` and return as soon as the
    transaction is submitted. Every other action is a read through `rpc_url`.
    Failures are reported as an error string rather than raised.
    """
    try:
        return _dispatch(wallet, args)
    except Exception as e:
        logger.warning(f"Vault {args.action} on {args.vault_address} failed: {e}")
        return describe_error(e)


def describe_error(error: Exception) -> str:
    message = str(error)
    if not message:
        return "An unknown error occurred"
    for needle, friendly in KNOWN_ERRORS:
        if needle in message:
            return friendly
    return f"Error: {message}"


def _dispatch(wallet, args: VaultActionInput) -> str:
    action = args.action
    amount = args.amount
    user = _checksum(args.user_address)
    abi = load_abi("ERC4626")["abi"]

    if action == "deposit":
        if not amount or not user:
            raise ValueError("Amount and user address required for deposits")
        tx = wallet.invoke_contract(contract_address=args.vault_address, method="deposit", abi=abi, args=[amount, user])
        return f"Deposit transaction submitted: {tx.transaction_hash}"

    if action == "withdraw":
        if not amount or not user:
            raise ValueError("Amount and user address required for withdrawals")
        tx = wallet.invoke_contract(contract_address=args.vault_address, method="withdraw", abi=abi, args=[amount, user, user])
        return f"Withdrawal transaction submitted: {tx.transaction_hash}"

    if action not in VAULT_QUERIES:
        raise ValueError(f"Unsupported action: {action}")

    function_name, requires, missing_message, template = VAULT_QUERIES[action]
    if requires == "amount":
        if not amount:
            raise ValueError(missing_message)
        call_args = [amount]
    elif requires == "user":
        if not user:
            raise ValueError(missing_message)
        call_args = [user]
    else:
        call_args = []

    vault = connect_vault(str(args.rpc_url), args.vault_address)
    result = getattr(vault.functions, function_name)(*call_args).call()
    return template.format(result=result, amount=amount)


def _checksum(address: Optional[str]) -> Optional[str]:
    return Web3.to_checksum_address(address) if address else None
