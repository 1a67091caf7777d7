"""
Shared fixtures
"""

import os
import json
import pytest
from unittest.mock import Mock

from blockchain.network_config import NetworkProfile

ROOT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

DEPLOYER_ADDRESS = '0x' + '11' * 20
COMPTEST_ADDRESS = '0x' + '22' * 20


@pytest.fixture
def root_dir():
    return ROOT_DIR


@pytest.fixture
def build_dir(tmp_path):
    """Truffle-style build directory with a CompTest artifact"""
    directory = tmp_path / 'build' / 'contracts'
    directory.mkdir(parents=True)

    artifact = {
        'contractName': 'CompTest',
        'abi': [
            {
                'inputs': [
                    {'name': '_token', 'type': 'address'},
                    {'name': '_cToken', 'type': 'address'}
                ],
                'stateMutability': 'nonpayable',
                'type': 'constructor'
            }
        ],
        'bytecode': '0x6080604052',
        'networks': {}
    }

    with open(directory / 'CompTest.json', 'w') as f:
        json.dump(artifact, f)

    return str(directory)


@pytest.fixture
def profile():
    return NetworkProfile(
        name='test',
        host='127.0.0.1',
        port=8545,
        network_id='*',
        skip_dry_run=True,
        provider_url='http://127.0.0.1:8545',
        private_key_env='PRIV_KEY_DEPLOY'
    )


@pytest.fixture
def constructor():
    """Mock contract constructor"""
    constructor = Mock()
    constructor.estimate_gas.return_value = 100000
    constructor.build_transaction.side_effect = lambda tx: {**tx, 'data': '0x6080604052'}
    return constructor


@pytest.fixture
def provider(constructor):
    """Mock signing provider with a mock Web3"""
    provider = Mock()
    provider.address = DEPLOYER_ADDRESS
    provider.chain_id.return_value = 1337
    provider.send_transaction.return_value = bytes.fromhex('ab' * 32)

    w3 = Mock()
    w3.eth.gas_price = 2000000000
    w3.eth.contract.return_value.constructor.return_value = constructor
    w3.eth.wait_for_transaction_receipt.return_value = {
        'status': 1,
        'contractAddress': COMPTEST_ADDRESS,
        'gasUsed': 95000,
        'blockNumber': 7
    }
    provider.w3 = w3

    return provider
