"""
Deployment Data Types
Artifacts, deployment handles, results and the collaborator protocols
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol

from .exceptions import DeploymentError

# Checksummed contract address
DeployedAddress = str


@dataclass(frozen=True)
class ContractArtifact:
    """Compiled contract loaded from the build output"""

    name: str
    abi: List[Dict[str, Any]]
    bytecode: str
    source_path: Optional[Path] = None


class DeploymentStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    FAILED = "failed"


@dataclass
class DeploymentHandle:
    """In-flight or settled creation transaction"""

    transaction_hash: str
    status: DeploymentStatus = DeploymentStatus.PENDING


@dataclass(frozen=True)
class DeploymentResult:
    """Outcome of a single deployment: an address or an error, never both"""

    contract_name: str
    address: Optional[DeployedAddress] = None
    error: Optional[DeploymentError] = field(default=None, compare=False)

    def __post_init__(self):
        if (self.address is None) == (self.error is None):
            raise ValueError("DeploymentResult needs exactly one of address or error")

    @property
    def ok(self) -> bool:
        return self.error is None


class ConfirmedInstance(Protocol):
    @property
    def address(self) -> DeployedAddress: ...


class PendingDeployment(Protocol):
    handle: DeploymentHandle

    async def await_confirmation(self) -> ConfirmedInstance: ...


class ContractFactory(Protocol):
    artifact: ContractArtifact

    async def deploy_new(self) -> PendingDeployment: ...


class FactoryResolver(Protocol):
    def resolve_factory(self, contract_name: str) -> ContractFactory: ...
