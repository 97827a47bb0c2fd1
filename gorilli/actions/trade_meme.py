from fractions import Fraction

from web3 import Web3

from gorilli.actions.schemas import GorilliMemeTradeInput, TradeAction
from gorilli.config import CONTRACT_ADDRESSES
from gorilli.utils import deadline_from_now, get_logger, load_abi

logger = get_logger(__name__)

MEME_TRADE_PROMPT = """
This tool executes trades in the Gorillionaire Vault on Base network.
- For SELL: Sells BRETT to get USDC
- For BUY: Sells USDC to get BRETT
The tool handles the proper token routing and minimum output calculations.
"""

TRADE_DEADLINE_SECONDS = 600


def min_amount_out(amount_in: str, slippage_percentage: float) -> int:
    """Lowest acceptable output for `amount_in` base units at the given slippage, rounded down."""
    factor = 1 - Fraction(str(slippage_percentage)) / 100
    return int(amount_in) * factor.numerator // factor.denominator


def gorilli_meme_trade(wallet, args: GorilliMemeTradeInput) -> str:
    """Execute a BUY or SELL through the Gorillionaire vault's executeTrade."""
    action = args.action.value
    token_out = CONTRACT_ADDRESSES["Brett"] if args.action == TradeAction.BUY else CONTRACT_ADDRESSES["USDC"]
    deadline = deadline_from_now(TRADE_DEADLINE_SECONDS)
    min_out = min_amount_out(args.amount_in, args.slippage_percentage)

    try:
        invocation = wallet.invoke_contract(
            contract_address=CONTRACT_ADDRESSES["GorillionaireVault"],
            method="executeTrade",
            abi=load_abi("GorillionaireVault")["abi"],
            args=[Web3.to_checksum_address(token_out), int(args.amount_in), min_out, deadline],
        )
        invocation.wait()
    except Exception as e:
        logger.error(f"Error executing {action} trade: {e}", exc_info=True)
        return f"Error executing trade: {str(e) or 'Unknown error'}"

    return (
        f"Successfully executed {action} trade. Transaction hash: {invocation.transaction_hash}. "
        f"Input amount: {args.amount_in}, Minimum output amount: {min_out}"
    )
