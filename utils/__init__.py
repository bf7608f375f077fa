"""
Utilities Package
Configuration, logging and RPC connection helpers
"""

from .config import DeployerConfig, load_config
from .logging_setup import configure_logging
from .rpc_manager import RPCManager

__all__ = [
    'DeployerConfig',
    'load_config',
    'configure_logging',
    'RPCManager'
]
