"""Unit tests for the web3-backed WalletProvider with a mocked Web3 instance."""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from web3 import Web3

from gorilli.config import CONTRACT_ADDRESSES
from gorilli.wallet_provider import ContractInvocation, WalletProvider, create_wallet_provider
from tests.conftest import OWNER, VAULT

TX_HASH = bytes.fromhex("ab" * 32)
WETH = Web3.to_checksum_address(CONTRACT_ADDRESSES["WETH"])
USDC = Web3.to_checksum_address(CONTRACT_ADDRESSES["USDC"])


@pytest.fixture
def w3():
    w3 = MagicMock()
    w3.is_connected.return_value = True
    w3.eth.account.from_key.return_value.address = OWNER
    w3.eth.account.from_key.return_value.sign_transaction.return_value.raw_transaction = b"signed"
    w3.eth.send_raw_transaction.return_value = TX_HASH
    w3.eth.estimate_gas.return_value = 100_000
    w3.eth.get_block.return_value = {"baseFeePerGas": 10}
    w3.eth.max_priority_fee = 2
    w3.eth.wait_for_transaction_receipt.return_value = {"status": 1, "contractAddress": VAULT}
    return w3


def make_wallet(w3, network="base-mainnet"):
    return WalletProvider(private_key="0x" + "11" * 32, network_name=network, w3=w3)


def signed_tx(w3):
    return w3.eth.account.from_key.return_value.sign_transaction.call_args.args[0]


class TestWalletProvider:
    def test_requires_connection(self, w3):
        w3.is_connected.return_value = False
        with pytest.raises(ConnectionError):
            make_wallet(w3)

    def test_address(self, w3):
        assert make_wallet(w3).get_address() == OWNER

    def test_network(self, w3):
        network = make_wallet(w3).get_network()
        assert network.protocol_family == "evm"
        assert network.network_id == "base-mainnet"
        assert network.chain_id == "8453"

    def test_unsupported_network(self, w3):
        with pytest.raises(ValueError, match="Unsupported network_id"):
            make_wallet(w3, network="moonbase").get_network()


class TestTransactions:
    def test_invoke_contract_pads_gas_and_sets_fees(self, w3):
        contract = w3.eth.contract.return_value
        contract.functions.deposit.return_value.build_transaction.return_value = {"to": VAULT, "data": "0x01"}

        invocation = make_wallet(w3).invoke_contract(VAULT, "deposit", abi=[], args=[1, OWNER])

        assert invocation.transaction_hash == "0x" + "ab" * 32
        contract.functions.deposit.assert_called_once_with(1, OWNER)
        tx = signed_tx(w3)
        assert tx["gas"] == 150_000
        assert tx["maxFeePerGas"] == 17
        assert tx["maxPriorityFeePerGas"] == 2
        assert tx["from"] == OWNER
        w3.eth.send_raw_transaction.assert_called_once_with(b"signed")

    def test_gas_estimation_fallback(self, w3):
        w3.eth.estimate_gas.side_effect = ValueError("execution reverted")
        w3.eth.contract.return_value.functions.deposit.return_value.build_transaction.return_value = {"to": VAULT}

        make_wallet(w3).invoke_contract(VAULT, "deposit", abi=[], args=[1, OWNER])

        assert signed_tx(w3)["gas"] == 1_000_000

    def test_deploy_contract_returns_address(self, w3):
        factory = w3.eth.contract.return_value
        factory.constructor.return_value.build_transaction.return_value = {"data": "0x6080"}

        address = make_wallet(w3).deploy_contract([], "0x6080", "arg")

        assert address == VAULT
        factory.constructor.assert_called_once_with("arg")
        w3.eth.wait_for_transaction_receipt.assert_called_once()

    def test_read_contract(self, w3):
        w3.eth.contract.return_value.functions.totalAssets.return_value.call.return_value = 99

        assert make_wallet(w3).read_contract(VAULT, [], "totalAssets") == 99


class TestContractInvocation:
    def test_link_uses_network_explorer(self, w3):
        invocation = ContractInvocation(w3, TX_HASH, "base-sepolia")
        assert invocation.transaction_link == "https://sepolia.basescan.org/tx/0x" + "ab" * 32

    def test_unknown_network_has_no_link(self, w3):
        assert ContractInvocation(w3, TX_HASH, "devnet").transaction_link == "N/A"

    def test_wait_stores_receipt(self, w3):
        invocation = ContractInvocation(w3, TX_HASH, "base-mainnet")
        assert invocation.wait() is invocation
        assert invocation.receipt["status"] == 1

    def test_reverted_transaction(self, w3):
        w3.eth.wait_for_transaction_receipt.return_value = {"status": 0}
        with pytest.raises(ValueError, match="reverted"):
            ContractInvocation(w3, TX_HASH, "base-mainnet").wait()


class TestCreateTrade:
    def test_rejects_testnets(self, w3):
        with pytest.raises(ValueError, match="only supported on mainnet"):
            make_wallet(w3, network="base-sepolia").create_trade(Decimal("1"), "eth", "usdc")

    def test_rejects_unknown_asset(self, w3):
        with pytest.raises(ValueError, match="Unsupported asset id: doge"):
            make_wallet(w3).create_trade(Decimal("1"), "eth", "doge")

    def test_rejects_same_asset(self, w3):
        w3.eth.contract.return_value.functions.WETH.return_value.call.return_value = WETH
        with pytest.raises(ValueError, match="Cannot trade eth for weth"):
            make_wallet(w3).create_trade(Decimal("1"), "eth", "weth")

    def test_native_to_token(self, w3):
        contract = w3.eth.contract.return_value
        contract.functions.WETH.return_value.call.return_value = WETH
        contract.functions.decimals.return_value.call.return_value = 6
        contract.functions.getAmountsOut.return_value.call.return_value = [10**17, 250_000_000]
        contract.functions.swapExactETHForTokens.return_value.build_transaction.return_value = {"to": "router"}

        trade = make_wallet(w3).create_trade(Decimal("0.1"), "eth", "usdc")

        assert trade.to_amount == Decimal("250")
        assert trade.transaction_hash == "0x" + "ab" * 32
        contract.functions.getAmountsOut.assert_called_once_with(10**17, [WETH, USDC])
        min_out, path, recipient, _deadline = contract.functions.swapExactETHForTokens.call_args.args
        assert min_out == 247_500_000
        assert path == [WETH, USDC]
        assert recipient == OWNER
        contract.functions.swapExactETHForTokens.return_value.build_transaction.assert_called_once_with(
            {"from": OWNER, "value": 10**17}
        )

    def test_token_to_native_approves_router(self, w3):
        contract = w3.eth.contract.return_value
        contract.functions.WETH.return_value.call.return_value = WETH
        contract.functions.decimals.return_value.call.return_value = 6
        contract.functions.allowance.return_value.call.return_value = 0
        contract.functions.getAmountsOut.return_value.call.return_value = [5_000_000, 2 * 10**15]
        contract.functions.approve.return_value.build_transaction.return_value = {"to": USDC}
        contract.functions.swapExactTokensForETH.return_value.build_transaction.return_value = {"to": "router"}

        trade = make_wallet(w3).create_trade(Decimal("5"), "usdc", "eth")

        assert trade.to_amount == Decimal("0.002")
        contract.functions.approve.assert_called_once_with(contract.address, 5_000_000)
        amount_in = contract.functions.swapExactTokensForETH.call_args.args[0]
        assert amount_in == 5_000_000


def test_create_wallet_provider_requires_private_key(monkeypatch):
    monkeypatch.delenv("PRIVATE_KEY", raising=False)
    with pytest.raises(EnvironmentError, match="PRIVATE_KEY"):
        create_wallet_provider()
