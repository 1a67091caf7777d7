"""
Wallet Provider
Binds a signing account to an RPC endpoint for deployments
"""

from typing import Dict
from web3 import Web3
from eth_account import Account
from loguru import logger


class WalletProvider:
    """
    Signs transactions locally with a private key and broadcasts them raw
    """

    def __init__(self, private_key: str, url: str):
        """
        Initialize wallet provider

        Args:
            private_key: Hex private key of the deploying account
            url: HTTP RPC endpoint
        """
        self.url = url
        self.w3 = Web3(Web3.HTTPProvider(url))
        self.account = Account.from_key(private_key)
        self.address = self.account.address

        logger.info(f"Deployer wallet: {self.address}")

    def is_connected(self) -> bool:
        return self.w3.is_connected()

    def chain_id(self) -> int:
        return self.w3.eth.chain_id

    def send_transaction(self, transaction: Dict) -> bytes:
        """
        Sign and broadcast a transaction

        Args:
            transaction: Transaction dict (nonce and chainId filled if missing)

        Returns:
            Transaction hash
        """
        tx = dict(transaction)
        tx.setdefault('from', self.address)
        tx.setdefault('nonce', self.w3.eth.get_transaction_count(self.address, 'pending'))
        tx.setdefault('chainId', self.chain_id())

        try:
            signed_tx = self.account.sign_transaction(tx)
        except Exception as e:
            logger.error(f"Error signing transaction: {e}")
            raise

        return self.w3.eth.send_raw_transaction(signed_tx.raw_transaction)


class NodeAccountProvider:
    """
    Uses the node's first unlocked account (local dev chains)
    """

    def __init__(self, url: str):
        self.url = url
        self.w3 = Web3(Web3.HTTPProvider(url))
        self._address = None

    @property
    def address(self) -> str:
        if self._address is None:
            accounts = self.w3.eth.accounts

            if not accounts:
                raise ValueError(f"Node at {self.url} exposes no accounts")

            self._address = accounts[0]
            logger.info(f"Deployer account (node): {self._address}")

        return self._address

    def is_connected(self) -> bool:
        return self.w3.is_connected()

    def chain_id(self) -> int:
        return self.w3.eth.chain_id

    def send_transaction(self, transaction: Dict) -> bytes:
        tx = dict(transaction)
        tx.setdefault('from', self.address)
        return self.w3.eth.send_transaction(tx)
