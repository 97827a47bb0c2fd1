from gorilli.actions.schemas import GorilliTradeInput
from gorilli.utils import get_logger

logger = get_logger(__name__)

GORILLI_TRADE_PROMPT = """
This tool will trade a specified amount of a 'from asset' to a 'to asset' for the wallet.

It takes the following inputs:
- The amount of the 'from asset' to trade
- The from asset ID to trade
- The asset ID to receive from the trade

- if brett use the contract 0x532f27101965dd16442e59d40670faf5ebb142e4
- use usdc or eth to pay it

Important notes:
- Trades are only supported on mainnet networks (ie, 'base-mainnet', 'base', 'ethereum-mainnet', 'ethereum', etc.)
- Never allow trades on any non-mainnet network (ie, 'base-sepolia', 'ethereum-sepolia', etc.)
- When selling a native asset (e.g. 'eth' on base-mainnet), ensure there is sufficient balance to pay for the trade AND the gas cost of this trade
"""


def gorilli_trade(wallet, args: GorilliTradeInput) -> str:
    """Trade `amount` of the from asset for the to asset and wait for it to be mined."""
    try:
        trade = wallet.create_trade(
            amount=args.amount,
            from_asset_id=args.from_asset_id,
            to_asset_id=args.to_asset_id,
        )
        result = trade.wait()
    except Exception as e:
        logger.error(f"Error trading {args.from_asset_id} for {args.to_asset_id}: {e}", exc_info=True)
        return f"Error trading assets: {e}"

    return (
        f"Gorilli - Traded {args.amount} of {args.from_asset_id} for {result.to_amount} of {args.to_asset_id}.\n"
        f"Transaction hash for the trade: {result.transaction_hash}\n"
        f"Transaction link for the trade: {result.transaction_link}"
    )
