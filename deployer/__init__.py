"""
Deployer Package
Contract deployment orchestration, result types and error taxonomy
"""

from .orchestrator import DeploymentOrchestrator
from .types import (
    ContractArtifact,
    DeployedAddress,
    DeploymentHandle,
    DeploymentResult,
    DeploymentStatus,
)
from .exceptions import (
    ArtifactNotFound,
    ConfirmationTimeout,
    DeploymentError,
    TransactionRejected,
    UnexpectedDeploymentFailure,
)

__all__ = [
    'DeploymentOrchestrator',
    'ContractArtifact',
    'DeployedAddress',
    'DeploymentHandle',
    'DeploymentResult',
    'DeploymentStatus',
    'DeploymentError',
    'ArtifactNotFound',
    'TransactionRejected',
    'ConfirmationTimeout',
    'UnexpectedDeploymentFailure',
]
