"""
Deployer Configuration
Loads network settings from config/deploy_config.json and the environment
"""

import os
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional
from loguru import logger
from dotenv import load_dotenv

load_dotenv()


DEFAULT_CONFIG_PATH = "config/deploy_config.json"

# Used when no config file is present
DEFAULT_CONFIG = {
    'contract_name': 'EscrowService',
    'default_network': 'core_testnet2',
    'artifacts_dir': 'artifacts',
    'deployment': {
        'confirmation_timeout': 300,
        'poll_latency': 1.0,
        'gas_multiplier': 1.2,
        'default_gas_limit': 3000000
    },
    'networks': {
        'core_testnet2': {
            'name': 'Core Testnet 2',
            'chain_id': 1114,
            'rpc_url_env': 'CORE_TESTNET2_RPC_URL',
            'rpc_urls': ['https://rpc.test2.btcs.network']
        },
        'localhost': {
            'name': 'Hardhat Localhost',
            'chain_id': 31337,
            'rpc_url_env': 'LOCALHOST_RPC_URL',
            'rpc_urls': ['http://127.0.0.1:8545']
        }
    }
}


@dataclass
class DeployerConfig:
    """Resolved settings for one deployment run"""

    contract_name: str
    network: str
    network_name: str
    rpc_urls: List[str]
    chain_id: Optional[int] = None
    private_key: Optional[str] = field(default=None, repr=False)
    artifacts_dir: Path = Path('artifacts')
    confirmation_timeout: float = 300
    poll_latency: float = 1.0
    gas_multiplier: float = 1.2
    default_gas_limit: int = 3000000


def load_config(config_path: str = DEFAULT_CONFIG_PATH, network: Optional[str] = None) -> DeployerConfig:
    """
    Build the deployer configuration

    Environment variables take precedence over the JSON file.

    Args:
        config_path: Path to deploy_config.json
        network: Network key (None = DEPLOY_NETWORK or the file's default)

    Returns:
        DeployerConfig
    """
    raw = _read_config_file(config_path)

    network_key = str(network or os.getenv('DEPLOY_NETWORK') or raw.get('default_network', 'core_testnet2'))
    networks = _section(raw, 'networks', config_path)

    if network_key not in networks:
        raise ValueError(
            f"Unknown network '{network_key}' (configured: {', '.join(sorted(networks)) or 'none'})"
        )

    network_config = _section(networks, network_key, config_path)
    deployment = _section(raw, 'deployment', config_path)

    configured_urls = network_config.get('rpc_urls', [])
    if not isinstance(configured_urls, list) or not all(isinstance(url, str) for url in configured_urls):
        raise ValueError(f"'rpc_urls' for network '{network_key}' must be a list of strings")

    rpc_urls = []
    env_url = os.getenv(str(network_config.get('rpc_url_env', '')))
    if env_url:
        rpc_urls.append(env_url)
    for url in configured_urls:
        if url not in rpc_urls:
            rpc_urls.append(url)

    if not rpc_urls:
        raise ValueError(f"No RPC URL configured for network '{network_key}'")

    chain_id = network_config.get('chain_id')
    timeout_env = os.getenv('CONFIRMATION_TIMEOUT')

    config = DeployerConfig(
        contract_name=os.getenv('DEPLOY_CONTRACT_NAME') or str(raw.get('contract_name', 'EscrowService')),
        network=network_key,
        network_name=str(network_config.get('name', network_key)),
        rpc_urls=rpc_urls,
        chain_id=None if chain_id is None else _number(int, chain_id, 'chain_id'),
        private_key=os.getenv('DEPLOYER_PRIVATE_KEY') or None,
        artifacts_dir=Path(os.getenv('ARTIFACTS_DIR') or str(raw.get('artifacts_dir', 'artifacts'))),
        confirmation_timeout=_number(
            float,
            timeout_env or deployment.get('confirmation_timeout', 300),
            'confirmation_timeout'
        ),
        poll_latency=_number(float, deployment.get('poll_latency', 1.0), 'poll_latency'),
        gas_multiplier=_number(float, deployment.get('gas_multiplier', 1.2), 'gas_multiplier'),
        default_gas_limit=_number(int, deployment.get('default_gas_limit', 3000000), 'default_gas_limit')
    )

    logger.debug(f"Loaded config for {config.network_name} ({len(config.rpc_urls)} RPC endpoints)")
    return config


def _section(parent: Dict, key: str, config_path: str) -> Dict:
    """Get a nested mapping, rejecting any other JSON type"""
    value = parent.get(key, {})

    if not isinstance(value, dict):
        raise ValueError(f"Invalid config {config_path}: '{key}' must be an object, got {type(value).__name__}")

    return value


def _number(kind, value, name: str):
    if isinstance(value, bool):
        raise ValueError(f"Invalid config value for {name}: {value!r}")

    try:
        return kind(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid config value for {name}: {value!r}") from None


def _read_config_file(config_path: str) -> Dict:
    """Read the JSON config, falling back to built-in defaults"""
    path = Path(config_path)

    if not path.exists():
        logger.debug(f"Config file not found: {config_path}, using defaults")
        return DEFAULT_CONFIG

    with open(path, 'r') as f:
        raw = json.load(f)

    if not isinstance(raw, dict):
        raise ValueError(f"Invalid config {config_path}: top level must be an object")

    return raw
