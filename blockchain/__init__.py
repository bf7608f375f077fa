"""
Blockchain Interaction Package
Artifact lookup and web3-backed contract deployment
"""

from .artifacts import ArtifactLoader
from .contract_factory import (
    Web3ContractFactory,
    Web3DeployedContract,
    Web3FactoryResolver,
    Web3PendingDeployment,
)

__all__ = [
    'ArtifactLoader',
    'Web3ContractFactory',
    'Web3DeployedContract',
    'Web3FactoryResolver',
    'Web3PendingDeployment',
]
