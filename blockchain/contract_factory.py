"""
Contract Factory
web3.py implementation of the factory / pending deployment / confirmed instance chain
"""

import asyncio
from typing import Dict, Optional
from web3 import Web3
from web3.exceptions import ContractLogicError, TransactionNotFound, Web3RPCError
from eth_account import Account
from eth_account.signers.local import LocalAccount
from loguru import logger

from deployer.exceptions import ConfirmationTimeout, TransactionRejected
from deployer.types import ContractArtifact, DeployedAddress, DeploymentHandle, DeploymentStatus
from utils.config import DeployerConfig
from utils.rpc_manager import RPCManager
from .artifacts import ArtifactLoader


class Web3DeployedContract:
    """Contract instance whose creation transaction has been mined"""

    def __init__(self, address: str, transaction_hash: str, gas_used: int, block_number: int):
        self._address = Web3.to_checksum_address(address)
        self.transaction_hash = transaction_hash
        self.gas_used = gas_used
        self.block_number = block_number

    @property
    def address(self) -> DeployedAddress:
        return self._address


class Web3PendingDeployment:
    """
    Submitted creation transaction

    Receipt polling yields to the event loop between lookups, so the wait
    can be cancelled. Cancelling does not cancel the transaction itself.
    """

    def __init__(self, w3: Web3, tx_hash: bytes, timeout: float, poll_latency: float):
        """
        Initialize Pending Deployment

        Args:
            w3: Web3 instance
            tx_hash: Hash returned by the node on submission
            timeout: Seconds to wait for the receipt
            poll_latency: Seconds between receipt polls
        """
        self.w3 = w3
        self.tx_hash = tx_hash
        self.timeout = timeout
        self.poll_latency = poll_latency
        self.handle = DeploymentHandle(transaction_hash=Web3.to_hex(tx_hash))

    async def await_confirmation(self) -> Web3DeployedContract:
        """
        Wait until the creation transaction is mined

        Returns:
            Web3DeployedContract

        Raises:
            ConfirmationTimeout: receipt not available within the timeout
            TransactionRejected: transaction reverted or created no contract
        """
        tx_hash_hex = self.handle.transaction_hash
        receipt = await self._poll_receipt()

        if receipt is None:
            self.handle.status = DeploymentStatus.FAILED
            raise ConfirmationTimeout(
                f"Transaction {tx_hash_hex} not confirmed within {self.timeout:g} seconds"
            )

        if receipt['status'] != 1:
            self.handle.status = DeploymentStatus.FAILED
            raise TransactionRejected(
                f"Transaction {tx_hash_hex} reverted in block {receipt.get('blockNumber')}"
            )

        contract_address = receipt.get('contractAddress')

        if not contract_address:
            self.handle.status = DeploymentStatus.FAILED
            raise TransactionRejected(f"Transaction {tx_hash_hex} did not create a contract")

        self.handle.status = DeploymentStatus.CONFIRMED
        logger.debug(f"Gas used: {receipt.get('gasUsed')}, block: {receipt.get('blockNumber')}")

        return Web3DeployedContract(
            address=contract_address,
            transaction_hash=tx_hash_hex,
            gas_used=receipt.get('gasUsed'),
            block_number=receipt.get('blockNumber')
        )

    async def _poll_receipt(self) -> Optional[Dict]:
        """
        Poll for the receipt until it exists or the timeout passes

        Each lookup is a single RPC call in a worker thread; the waits between
        lookups are asyncio sleeps, so cancelling the task stops polling.

        Returns:
            Receipt, or None on timeout
        """
        loop = asyncio.get_running_loop()
        deadline = loop.time() + self.timeout

        while True:
            try:
                return await asyncio.to_thread(self.w3.eth.get_transaction_receipt, self.tx_hash)
            except TransactionNotFound:
                pass

            remaining = deadline - loop.time()
            if remaining <= 0:
                return None

            await asyncio.sleep(min(self.poll_latency, remaining))


class Web3ContractFactory:
    """Builds and submits creation transactions for one artifact"""

    def __init__(
        self,
        w3: Web3,
        artifact: ContractArtifact,
        config: DeployerConfig,
        account: Optional[LocalAccount] = None
    ):
        """
        Initialize Contract Factory

        Args:
            w3: Web3 instance
            artifact: Compiled contract
            config: Deployer configuration (gas and confirmation settings)
            account: Local signing account (None = node-managed account)
        """
        self.w3 = w3
        self.artifact = artifact
        self.config = config
        self.account = account

    async def deploy_new(self) -> Web3PendingDeployment:
        """
        Submit a creation transaction with no constructor arguments

        Returns:
            Web3PendingDeployment

        Raises:
            TransactionRejected: node refused the transaction
        """
        try:
            tx_hash = await asyncio.to_thread(self._submit)
        except (ContractLogicError, Web3RPCError, ValueError) as e:
            raise TransactionRejected(f"Deployment transaction rejected: {e}") from e

        return Web3PendingDeployment(
            self.w3,
            tx_hash,
            timeout=self.config.confirmation_timeout,
            poll_latency=self.config.poll_latency
        )

    def _submit(self) -> bytes:
        contract = self.w3.eth.contract(abi=self.artifact.abi, bytecode=self.artifact.bytecode)
        constructor = contract.constructor()

        if self.account is None:
            accounts = self.w3.eth.accounts

            if not accounts:
                raise TransactionRejected(
                    "DEPLOYER_PRIVATE_KEY not set and the node has no unlocked accounts"
                )

            sender = accounts[0]
            self._log_sender(sender)
            return constructor.transact({'from': sender})

        sender = self.account.address
        self._log_sender(sender)

        transaction = constructor.build_transaction(self._transaction_params(constructor, sender))

        logger.info("Signing transaction...")
        signed_tx = self.account.sign_transaction(transaction)

        return self.w3.eth.send_raw_transaction(signed_tx.raw_transaction)

    def _transaction_params(self, constructor, sender: str) -> Dict:
        """Nonce, chain id and buffered gas limit for a locally signed transaction"""
        try:
            gas_estimate = constructor.estimate_gas({'from': sender})
            gas_limit = int(gas_estimate * self.config.gas_multiplier)
        except (ContractLogicError, Web3RPCError, ValueError) as e:
            logger.warning(f"Gas estimation failed: {e}, using default")
            gas_limit = self.config.default_gas_limit

        logger.info(f"Gas limit: {gas_limit}")

        return {
            'from': sender,
            'nonce': self.w3.eth.get_transaction_count(sender, 'pending'),
            'gas': gas_limit,
            'chainId': self.w3.eth.chain_id
        }

    def _log_sender(self, sender: str):
        balance = self.w3.eth.get_balance(sender)
        logger.info(f"Deploying from: {sender}")
        logger.info(f"Account balance: {self.w3.from_wei(balance, 'ether')}")


class Web3FactoryResolver:
    """
    Resolves contract names into web3 factories

    Artifact lookup happens before connecting, so unknown names fail without
    touching the network.
    """

    def __init__(self, rpc_manager: RPCManager, artifact_loader: ArtifactLoader, config: DeployerConfig):
        """
        Initialize Factory Resolver

        Args:
            rpc_manager: RPC connection source
            artifact_loader: Compiled artifact lookup
            config: Deployer configuration
        """
        self.rpc_manager = rpc_manager
        self.artifact_loader = artifact_loader
        self.config = config

        self.account = Account.from_key(config.private_key) if config.private_key else None

    def resolve_factory(self, contract_name: str) -> Web3ContractFactory:
        """
        Build a factory for a contract

        Args:
            contract_name: Contract name

        Returns:
            Web3ContractFactory

        Raises:
            ArtifactNotFound: no artifact for the name
            ConnectionError: no RPC endpoint reachable
        """
        artifact = self.artifact_loader.load(contract_name)
        w3 = self.rpc_manager.get_web3()

        if self.config.chain_id is not None and w3.eth.chain_id != self.config.chain_id:
            logger.warning(
                f"Connected chain id {w3.eth.chain_id} differs from configured "
                f"{self.config.chain_id} ({self.config.network_name})"
            )

        return Web3ContractFactory(w3, artifact, self.config, self.account)
