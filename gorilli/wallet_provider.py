import os
from decimal import Decimal
from typing import Any, Dict, List, Optional

from coinbase_agentkit.network import Network
from web3 import Web3

from gorilli.config import (
    ASSETS,
    CHAIN_IDS,
    CONTRACT_ADDRESSES,
    EXPLORERS,
    MAINNET_NETWORKS,
    NETWORK,
    TRADE_SLIPPAGE_BPS,
)
from gorilli.utils import deadline_from_now, get_logger, is_address, load_abi

logger = get_logger(__name__)

DEFAULT_GAS_LIMIT = 1_000_000
TRADE_DEADLINE_SECONDS = 600


class ContractInvocation:
    """A submitted transaction. Call wait() to block until it is mined."""

    def __init__(self, w3: Web3, tx_hash: bytes, network_id: str):
        self.w3 = w3
        self.network_id = network_id
        self.receipt = None
        self._tx_hash = tx_hash

    @property
    def transaction_hash(self) -> str:
        return Web3.to_hex(self._tx_hash)

    @property
    def transaction_link(self) -> str:
        explorer = EXPLORERS.get(self.network_id)
        if explorer is None:
            return "N/A"
        return f"{explorer}/tx/{self.transaction_hash}"

    def wait(self, timeout: int = 120) -> "ContractInvocation":
        receipt = self.w3.eth.wait_for_transaction_receipt(self._tx_hash, timeout=timeout)
        if receipt["status"] == 0:
            raise ValueError(f"Transaction {self.transaction_hash} reverted")
        self.receipt = receipt
        return self


class Trade(ContractInvocation):
    """A submitted swap together with the quoted amount of the asset received."""

    def __init__(self, w3: Web3, tx_hash: bytes, network_id: str, to_amount: Decimal):
        super().__init__(w3, tx_hash, network_id)
        self.to_amount = to_amount


class WalletProvider:
    def __init__(self, private_key: str, network_name: str, rpc_url: Optional[str] = None, w3: Optional[Web3] = None):
        self.network_name = network_name
        self.w3 = w3 or Web3(Web3.HTTPProvider(rpc_url))
        if not self.w3.is_connected():
            raise ConnectionError("Failed to connect to the blockchain network. Check the RPC URL.")
        self.account = self.w3.eth.account.from_key(private_key)

    def get_address(self) -> str:
        return self.account.address

    def get_name(self) -> str:
        return "Gorilli Wallet"

    def get_network(self) -> Network:
        chain_id = CHAIN_IDS.get(self.network_name)
        if chain_id is None:
            raise ValueError(f"Unsupported network_id: {self.network_name}")
        return Network(protocol_family="evm", network_id=self.network_name, chain_id=str(chain_id))

    def deploy_contract(self, abi: List[Dict[str, Any]], bytecode: str, *constructor_args) -> str:
        """Deploy a contract and wait for it to be mined. Returns the new contract address."""
        factory = self.w3.eth.contract(abi=abi, bytecode=bytecode)
        tx = factory.constructor(*constructor_args).build_transaction({"from": self.account.address})
        invocation = ContractInvocation(self.w3, self._send_transaction(tx), self.network_name).wait()
        contract_address = invocation.receipt["contractAddress"]
        logger.info(f"Deployed contract at {contract_address}, tx hash: {invocation.transaction_hash}")
        return contract_address

    def invoke_contract(
        self,
        contract_address: str,
        method: str,
        abi: List[Dict[str, Any]],
        args: Optional[List[Any]] = None,
        value: int = 0,
    ) -> ContractInvocation:
        contract = self.w3.eth.contract(address=Web3.to_checksum_address(contract_address), abi=abi)
        tx = getattr(contract.functions, method)(*(args or [])).build_transaction({
            "from": self.account.address,
            "value": value,
        })
        invocation = ContractInvocation(self.w3, self._send_transaction(tx), self.network_name)
        logger.info(f"Called {method} on contract {contract_address}, tx hash: {invocation.transaction_hash}")
        return invocation

    def read_contract(self, contract_address: str, abi: List[Dict[str, Any]], method: str, args: Optional[List[Any]] = None) -> Any:
        contract = self.w3.eth.contract(address=Web3.to_checksum_address(contract_address), abi=abi)
        return getattr(contract.functions, method)(*(args or [])).call()

    def create_trade(self, amount: Decimal, from_asset_id: str, to_asset_id: str) -> Trade:
        """Swap `amount` whole units of one asset for another through the configured router.

        The returned Trade has been submitted but not mined; its to_amount is
        the router's quote at submission time.
        """
        if self.network_name not in MAINNET_NETWORKS:
            raise ValueError(f"Trades are only supported on mainnet networks, not {self.network_name}")

        from_token = self._resolve_asset(from_asset_id)
        to_token = self._resolve_asset(to_asset_id)
        router = self.w3.eth.contract(
            address=Web3.to_checksum_address(CONTRACT_ADDRESSES["SwapRouter"]),
            abi=load_abi("UniswapV2Router")["abi"],
        )
        weth = router.functions.WETH().call()
        path = [from_token or weth, to_token or weth]
        if path[0].lower() == path[1].lower():
            raise ValueError(f"Cannot trade {from_asset_id} for {to_asset_id}")

        amount_in = int(amount * (10 ** self._decimals(from_token)))
        if amount_in <= 0:
            raise ValueError(f"Trade amount {amount} is too small for {from_asset_id}")

        expected_out = router.functions.getAmountsOut(amount_in, path).call()[-1]
        min_out = expected_out * (10_000 - TRADE_SLIPPAGE_BPS) // 10_000
        deadline = deadline_from_now(TRADE_DEADLINE_SECONDS)
        owner = self.account.address
        logger.info(f"Trading {amount} {from_asset_id} for {to_asset_id}: expected out {expected_out}, minimum {min_out}")

        if from_token is None:
            swap = router.functions.swapExactETHForTokens(min_out, path, owner, deadline)
            value = amount_in
        else:
            self._approve(from_token, router.address, amount_in)
            if to_token is None:
                swap = router.functions.swapExactTokensForETH(amount_in, min_out, path, owner, deadline)
            else:
                swap = router.functions.swapExactTokensForTokens(amount_in, min_out, path, owner, deadline)
            value = 0

        tx_hash = self._send_transaction(swap.build_transaction({"from": owner, "value": value}))
        to_amount = Decimal(expected_out) / (Decimal(10) ** self._decimals(to_token))
        return Trade(self.w3, tx_hash, self.network_name, to_amount)

    def _resolve_asset(self, asset_id: str) -> Optional[str]:
        """Map an asset id to a checksummed token address, or None for the native asset."""
        key = asset_id.lower()
        if key in ASSETS:
            address = ASSETS[key]
        elif is_address(asset_id):
            address = asset_id
        else:
            raise ValueError(f"Unsupported asset id: {asset_id}. Use one of {', '.join(ASSETS)} or a token address.")
        return Web3.to_checksum_address(address) if address else None

    def _decimals(self, token: Optional[str]) -> int:
        if token is None:
            return 18
        return self.read_contract(token, load_abi("ERC20")["abi"], "decimals")

    def _approve(self, token: str, spender: str, amount: int) -> None:
        allowance = self.read_contract(token, load_abi("ERC20")["abi"], "allowance", [self.account.address, spender])
        if allowance >= amount:
            return
        self.invoke_contract(token, "approve", load_abi("ERC20")["abi"], [spender, amount]).wait()

    def _send_transaction(self, tx: Dict[str, Any]) -> bytes:
        """Fill nonce, gas and EIP-1559 fees, sign locally and broadcast. Returns the tx hash."""
        tx.setdefault("from", self.account.address)
        tx.setdefault("chainId", self.w3.eth.chain_id)
        tx["nonce"] = self.w3.eth.get_transaction_count(self.account.address, "pending")

        try:
            gas_estimate = self.w3.eth.estimate_gas(tx)
            tx["gas"] = int(gas_estimate * 1.5)
            logger.debug(f"Estimated gas: {gas_estimate}, setting gas limit to: {tx['gas']}")
        except Exception as e:
            logger.warning(f"Gas estimation failed: {e}. Using default gas value.")
            tx["gas"] = DEFAULT_GAS_LIMIT

        if "maxFeePerGas" not in tx or "maxPriorityFeePerGas" not in tx:
            base_fee = self.w3.eth.get_block("latest")["baseFeePerGas"]
            max_priority_fee = self.w3.eth.max_priority_fee
            tx["maxFeePerGas"] = int(base_fee * 1.5 + max_priority_fee)
            tx["maxPriorityFeePerGas"] = max_priority_fee
            tx.pop("gasPrice", None)

        signed_tx = self.account.sign_transaction(tx)
        return self.w3.eth.send_raw_transaction(signed_tx.raw_transaction)


def create_wallet_provider() -> WalletProvider:
    """Build a WalletProvider from the environment (PRIVATE_KEY, NETWORK_NAME, NETWORK_RPC_URL)."""
    required_vars = {
        "PRIVATE_KEY": os.getenv("PRIVATE_KEY"),
        "NETWORK_RPC_URL": NETWORK["rpc_url"],
    }
    missing_vars = [key for key, value in required_vars.items() if not value]
    if missing_vars:
        raise EnvironmentError(f"Missing required environment variables: {', '.join(missing_vars)}")
    return WalletProvider(
        private_key=required_vars["PRIVATE_KEY"],
        network_name=NETWORK["network_id"],
        rpc_url=NETWORK["rpc_url"],
    )
