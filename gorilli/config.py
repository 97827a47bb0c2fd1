from dotenv import load_dotenv
import os

load_dotenv()

NETWORK = {
    "network_id": os.getenv("NETWORK_NAME", "base-mainnet"),
    "rpc_url": os.getenv("NETWORK_RPC_URL", "https://mainnet.base.org"),
}

# Vault deployments go to Base Sepolia unless overridden
VAULT_DEPLOY_RPC_URL = os.getenv("VAULT_DEPLOY_RPC_URL", "https://sepolia.base.org")
VAULT_DEPLOY_NETWORK = os.getenv("VAULT_DEPLOY_NETWORK", "base-sepolia")

CONTRACT_ADDRESSES = {
    "GorillionaireVault": os.getenv("GORILLIONAIRE_VAULT_ADDRESS", "0xc6827ce6d60a13a20a86dcac8c9e6d0f84497345"),
    "Brett": os.getenv("BRETT_ADDRESS", "0x532f27101965dd16442e59d40670faf5ebb142e4"),
    "USDC": os.getenv("USDC_ADDRESS", "0x833589fcd6edb6e08f4c7c32d4f71b54bda02913"),
    "WETH": os.getenv("WETH_ADDRESS", "0x4200000000000000000000000000000000000006"),
    # Uniswap V2 Router02 on Base
    "SwapRouter": os.getenv("SWAP_ROUTER_ADDRESS", "0x4752ba5dbc23f44d87826276bf6fd6b1c372ad24"),
}

# Asset ids accepted by trades. None marks the native asset.
ASSETS = {
    "eth": None,
    "weth": CONTRACT_ADDRESSES["WETH"],
    "usdc": CONTRACT_ADDRESSES["USDC"],
    "brett": CONTRACT_ADDRESSES["Brett"],
}

CHAIN_IDS = {
    "base-mainnet": 8453,
    "base-sepolia": 84532,
    "ethereum-mainnet": 1,
    "ethereum-sepolia": 11155111,
}

EXPLORERS = {
    "base-mainnet": "https://basescan.org",
    "base-sepolia": "https://sepolia.basescan.org",
    "ethereum-mainnet": "https://etherscan.io",
    "ethereum-sepolia": "https://sepolia.etherscan.io",
}

MAINNET_NETWORKS = ("base-mainnet", "ethereum-mainnet")

TRADE_SLIPPAGE_BPS = int(os.getenv("TRADE_SLIPPAGE_BPS", "100"))

# Extra directory searched for compiled contract artifacts (with bytecode)
CONTRACTS_DIR = os.getenv("CONTRACTS_DIR", os.path.join(os.getcwd(), "contracts"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
