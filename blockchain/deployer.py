"""
Contract Deployer
Deploys compiled contracts against a network profile
"""

from dataclasses import dataclass
from typing import Dict, Optional
from web3 import Web3
from web3.exceptions import Web3Exception
from loguru import logger

from .artifacts import load_artifact, record_deployment
from .errors import DeploymentError
from .network_config import NetworkProfile, DEFAULT_BUILD_DIR

# Ganache/Truffle default block gas for deployments
DEFAULT_GAS_LIMIT = 6721975
GAS_BUFFER = 1.2


@dataclass
class DeployedContract:
    """Result of a successful deployment"""

    name: str
    address: str
    transaction_hash: str
    gas_used: int
    block_number: int


class Deployer:
    """
    Deploys contracts through a provider
    """

    def __init__(
        self,
        provider,
        profile: NetworkProfile,
        build_dir: str = DEFAULT_BUILD_DIR,
        dry_run_only: bool = False
    ):
        """
        Initialize Deployer

        Args:
            provider: WalletProvider or NodeAccountProvider
            profile: Network profile being deployed to
            build_dir: Directory with compiled artifacts
            dry_run_only: Simulate every deploy without broadcasting
        """
        self.provider = provider
        self.w3 = provider.w3
        self.profile = profile
        self.build_dir = build_dir
        self.dry_run_only = dry_run_only

        self.deployed: Dict[str, DeployedContract] = {}
        self._chain_id = None

    @property
    def chain_id(self) -> int:
        if self._chain_id is None:
            self._chain_id = self.provider.chain_id()
        return self._chain_id

    def check_network(self):
        """Make sure the node is the chain the profile expects"""
        chain_id = self.chain_id

        if not self.profile.matches_network(chain_id):
            raise DeploymentError(
                f"Network '{self.profile.name}' expects network id "
                f"{self.profile.network_id}, node reports {chain_id}"
            )

        logger.info(f"Network '{self.profile.name}' (chain id {chain_id})")

    @staticmethod
    def normalize_args(args) -> list:
        """
        Checksum constructor arguments that look like addresses

        Single-case addresses are checksummed. Mixed-case ones must already
        carry a valid checksum.
        """
        normalized = []

        for arg in args:
            if isinstance(arg, str) and Web3.is_address(arg.lower()):
                body = arg[2:]
                if body == body.lower() or body == body.upper():
                    arg = Web3.to_checksum_address(arg)
                elif not Web3.is_checksum_address(arg):
                    raise ValueError(f"Invalid address checksum: {arg}")
            normalized.append(arg)

        return normalized

    def _constructor(self, contract_name: str, args):
        artifact = load_artifact(contract_name, self.build_dir)
        Contract = self.w3.eth.contract(abi=artifact['abi'], bytecode=artifact['bytecode'])
        return Contract.constructor(*self.normalize_args(args))

    def _gas_price(self) -> int:
        if self.profile.gas_price:
            return int(self.profile.gas_price)
        return self.w3.eth.gas_price

    def _estimate_gas(self, constructor) -> int:
        try:
            gas_estimate = constructor.estimate_gas({'from': self.provider.address})
            return int(gas_estimate * GAS_BUFFER)
        except Exception as e:
            gas_limit = self.profile.gas or DEFAULT_GAS_LIMIT
            logger.warning(f"Gas estimation failed: {e}, using {gas_limit}")
            return gas_limit

    def _build_transaction(self, constructor) -> Dict:
        gas_limit = self._estimate_gas(constructor)
        gas_price = self._gas_price()

        return constructor.build_transaction({
            'from': self.provider.address,
            'gas': gas_limit,
            'gasPrice': gas_price
        })

    def dry_run(self, contract_name: str, *args) -> Dict:
        """
        Simulate a deployment without broadcasting it

        Args:
            contract_name: Contract to deploy
            *args: Constructor arguments

        Returns:
            Dict with gas, gas_price and cost_ether
        """
        logger.info(f"Dry run: {contract_name}")

        constructor = self._constructor(contract_name, args)
        transaction = self._build_transaction(constructor)

        try:
            self.w3.eth.call({
                'from': transaction['from'],
                'data': transaction['data'],
                'gas': transaction['gas']
            })
        except Exception as e:
            raise DeploymentError(f"Dry run of {contract_name} failed: {e}") from e

        cost = Web3.from_wei(transaction['gas'] * transaction['gasPrice'], 'ether')

        logger.info(f"  Gas limit: {transaction['gas']}")
        logger.info(f"  Gas price: {Web3.from_wei(transaction['gasPrice'], 'gwei')} gwei")
        logger.info(f"  Max cost: {cost} ETH")

        return {
            'gas': transaction['gas'],
            'gas_price': transaction['gasPrice'],
            'cost_ether': cost
        }

    def deploy(self, contract_name: str, *args) -> Optional[DeployedContract]:
        """
        Deploy a contract

        Args:
            contract_name: Contract to deploy (artifact name)
            *args: Constructor arguments

        Returns:
            DeployedContract, or None in dry-run-only mode
        """
        self.check_network()

        if self.dry_run_only:
            self.dry_run(contract_name, *args)
            return None

        if not self.profile.skip_dry_run:
            self.dry_run(contract_name, *args)

        logger.info(f"Deploying {contract_name}...")

        constructor = self._constructor(contract_name, args)
        transaction = self._build_transaction(constructor)

        try:
            tx_hash = self.provider.send_transaction(transaction)
        except Web3Exception as e:
            logger.error(f"Error sending {contract_name} deployment: {e}")
            raise DeploymentError(f"{contract_name} deployment not sent: {e}") from e

        tx_hash_hex = Web3.to_hex(tx_hash)

        logger.info(f"Transaction sent: {tx_hash_hex}")
        logger.info("Waiting for confirmation...")

        try:
            receipt = self.w3.eth.wait_for_transaction_receipt(tx_hash, timeout=self.profile.timeout)
        except Web3Exception as e:
            logger.error(f"No receipt for {tx_hash_hex}: {e}")
            raise DeploymentError(f"{contract_name} deployment not confirmed (tx {tx_hash_hex}): {e}") from e

        if receipt['status'] != 1:
            logger.error(f"❌ Deployment of {contract_name} reverted: {tx_hash_hex}")
            raise DeploymentError(f"{contract_name} deployment reverted (tx {tx_hash_hex})")

        deployed = DeployedContract(
            name=contract_name,
            address=receipt['contractAddress'],
            transaction_hash=tx_hash_hex,
            gas_used=receipt['gasUsed'],
            block_number=receipt['blockNumber']
        )

        logger.success(f"✅ {contract_name} deployed at {deployed.address}")
        logger.success(f"Gas used: {deployed.gas_used}")

        record_deployment(contract_name, self.build_dir, self.chain_id, deployed.address, tx_hash_hex)

        self.deployed[contract_name] = deployed
        return deployed
