"""
Contract Artifacts
Reads compiled contract JSON and records deployed addresses back into it
"""

import os
import json
from typing import Dict, Optional
from loguru import logger

from .errors import DeploymentError


def artifact_path(contract_name: str, build_dir: str) -> Optional[str]:
    """
    Locate a compiled artifact

    Checks the Truffle layout (<build_dir>/<Name>.json) first, then the
    Hardhat layout (artifacts/contracts/<Name>.sol/<Name>.json) under the
    project root, two levels above build_dir.
    """
    project_root = os.path.dirname(os.path.dirname(os.path.abspath(build_dir)))

    candidates = [
        os.path.join(build_dir, f"{contract_name}.json"),
        os.path.join(project_root, 'artifacts', 'contracts', f"{contract_name}.sol", f"{contract_name}.json")
    ]

    for path in candidates:
        if os.path.exists(path):
            return path

    return None


def load_artifact(contract_name: str, build_dir: str) -> Dict:
    """
    Load ABI and bytecode for a contract

    Args:
        contract_name: Contract name (e.g. 'CompTest')
        build_dir: Truffle build directory

    Returns:
        Dict with 'abi', 'bytecode', 'networks' and 'path'
    """
    path = artifact_path(contract_name, build_dir)

    if path is None:
        raise DeploymentError(
            f"Contract artifact not found for {contract_name} in {build_dir}; compile the contracts first"
        )

    with open(path, 'r') as f:
        contract_json = json.load(f)

    abi = contract_json.get('abi')
    bytecode = contract_json.get('bytecode')

    # Hardhat and solc --combined-json sometimes nest the object
    if isinstance(bytecode, dict):
        bytecode = bytecode.get('object')

    if abi is None:
        raise DeploymentError(f"{path} has no ABI")

    if not bytecode or bytecode in ('0x', '0x0'):
        raise DeploymentError(f"{contract_name} has no bytecode (abstract contract or interface?)")

    return {
        'abi': abi,
        'bytecode': bytecode,
        'networks': contract_json.get('networks', {}),
        'path': path
    }


def record_deployment(
    contract_name: str,
    build_dir: str,
    network_id,
    address: str,
    tx_hash: str
) -> Optional[str]:
    """
    Write the deployed address into the artifact's networks section

    Returns:
        Path written, or None if the artifact is missing
    """
    path = artifact_path(contract_name, build_dir)

    if path is None:
        logger.warning(f"No artifact for {contract_name}, deployment not recorded")
        return None

    with open(path, 'r') as f:
        contract_json = json.load(f)

    networks = contract_json.setdefault('networks', {})
    networks[str(network_id)] = {
        'address': address,
        'transactionHash': tx_hash
    }

    with open(path, 'w') as f:
        json.dump(contract_json, f, indent=2)

    logger.info(f"Recorded {contract_name} at {address} for network {network_id}")
    return path
