"""
Network Configuration
Loads named network profiles from config/networks.json
"""

import os
import json
from dataclasses import dataclass
from typing import Dict, Optional
from loguru import logger
from dotenv import load_dotenv

from .wallet_provider import WalletProvider, NodeAccountProvider

load_dotenv()

DEFAULT_CONFIG_PATH = 'config/networks.json'
DEFAULT_BUILD_DIR = 'build/contracts'


@dataclass(frozen=True)
class NetworkProfile:
    """
    Named connection + signing settings for one network

    network_id "*" matches any chain the node reports.
    """

    name: str
    host: str = '127.0.0.1'
    port: int = 8545
    network_id: str = '*'
    skip_dry_run: bool = False
    provider_url: Optional[str] = None
    private_key_env: Optional[str] = None
    gas: Optional[int] = None
    gas_price: Optional[int] = None
    timeout: int = 300

    @property
    def rpc_url(self) -> str:
        if self.provider_url:
            return self.provider_url
        return f"http://{self.host}:{self.port}"

    def matches_network(self, chain_id) -> bool:
        """Check a node's chain id against this profile"""
        if self.network_id == '*':
            return True
        return str(self.network_id) == str(chain_id)

    def make_provider(self):
        """
        Build the provider used to sign and send transactions

        Returns:
            WalletProvider bound to the env private key, or NodeAccountProvider
            when the profile has no key configured
        """
        if not self.private_key_env:
            logger.info(f"Network '{self.name}' has no key, using node accounts")
            return NodeAccountProvider(self.rpc_url)

        private_key = os.getenv(self.private_key_env)

        if not private_key:
            raise ValueError(f"{self.private_key_env} must be set in .env")

        return WalletProvider(private_key, self.rpc_url)


def load_network_config(path: str = DEFAULT_CONFIG_PATH) -> Dict:
    """Read the network config file"""
    with open(path, 'r') as f:
        config = json.load(f)

    if 'networks' not in config:
        raise ValueError(f"No 'networks' section in {path}")

    return config


def get_build_dir(config: Dict) -> str:
    return config.get('contracts_build_directory', DEFAULT_BUILD_DIR)


def get_network(
    name: str,
    config: Optional[Dict] = None,
    path: str = DEFAULT_CONFIG_PATH
) -> NetworkProfile:
    """
    Look up a network profile by name

    Args:
        name: Profile name (e.g. 'test')
        config: Already loaded config (None = read from path)
        path: Config file path

    Returns:
        NetworkProfile
    """
    if config is None:
        config = load_network_config(path)

    networks = config['networks']

    if name not in networks:
        known = ', '.join(sorted(networks)) or 'none'
        raise ValueError(f"Unknown network '{name}' (configured: {known})")

    data = networks[name]
    provider = data.get('provider') or {}

    profile = NetworkProfile(
        name=name,
        host=data.get('host', '127.0.0.1'),
        port=int(data.get('port', 8545)),
        network_id=str(data.get('network_id', '*')),
        skip_dry_run=bool(data.get('skip_dry_run', False)),
        provider_url=provider.get('url'),
        private_key_env=provider.get('private_key_env'),
        gas=int(data['gas']) if data.get('gas') else None,
        gas_price=int(data['gas_price']) if data.get('gas_price') else None,
        timeout=int(data.get('timeout', 300))
    )

    logger.debug(f"Loaded network profile '{name}': {profile.rpc_url}")
    return profile
