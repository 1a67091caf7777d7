"""
Blockchain Interaction Package
Handles network profiles, signing providers, artifacts and contract deployment
"""

from .errors import DeploymentError
from .wallet_provider import WalletProvider, NodeAccountProvider
from .network_config import NetworkProfile, get_network, load_network_config
from .deployer import Deployer, DeployedContract
from .migration_runner import run_migrations

__all__ = [
    'DeploymentError',
    'WalletProvider',
    'NodeAccountProvider',
    'NetworkProfile',
    'get_network',
    'load_network_config',
    'Deployer',
    'DeployedContract',
    'run_migrations'
]
