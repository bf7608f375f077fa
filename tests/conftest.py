"""
Shared fixtures: fake deployment collaborator and Hardhat artifact trees
"""

import json
import itertools
from pathlib import Path

import pytest
from loguru import logger

from deployer.exceptions import ArtifactNotFound
from deployer.types import ContractArtifact, DeploymentHandle, DeploymentStatus


ESCROW_ABI = [
    {"inputs": [], "stateMutability": "nonpayable", "type": "constructor"},
    {
        "inputs": [],
        "name": "owner",
        "outputs": [{"name": "", "type": "address"}],
        "stateMutability": "view",
        "type": "function"
    }
]
ESCROW_BYTECODE = "0x6080604052348015600f57600080fd5b50603f80601d6000396000f3fe"


class FakeInstance:
    def __init__(self, address):
        self.address = address


class FakePending:
    def __init__(self, tx_hash, address, confirm_error=None):
        self.handle = DeploymentHandle(transaction_hash=tx_hash)
        self._address = address
        self._confirm_error = confirm_error

    async def await_confirmation(self):
        if self._confirm_error is not None:
            self.handle.status = DeploymentStatus.FAILED
            raise self._confirm_error
        self.handle.status = DeploymentStatus.CONFIRMED
        return FakeInstance(self._address)


class FakeFactory:
    def __init__(self, resolver, artifact):
        self.resolver = resolver
        self.artifact = artifact

    async def deploy_new(self):
        if self.resolver.submit_error is not None:
            raise self.resolver.submit_error
        n = next(self.resolver.counter)
        self.resolver.submitted += 1
        return FakePending(
            tx_hash=f"0x{n:064x}",
            address=self.resolver.addresses.get(n, f"0x{n:040x}"),
            confirm_error=self.resolver.confirm_error
        )


class FakeResolver:
    """In-memory collaborator; every deployment gets a fresh address"""

    def __init__(self, known=("EscrowService",)):
        self.known = set(known)
        self.counter = itertools.count(1)
        self.addresses = {}
        self.submitted = 0
        self.submit_error = None
        self.confirm_error = None
        self.resolve_error = None

    def resolve_factory(self, contract_name):
        if self.resolve_error is not None:
            raise self.resolve_error
        if contract_name not in self.known:
            raise ArtifactNotFound(f"Contract artifact not found: {contract_name}")
        return FakeFactory(self, ContractArtifact(contract_name, ESCROW_ABI, ESCROW_BYTECODE))


@pytest.fixture(autouse=True)
def reset_logger():
    """Drop sinks bound to captured streams after each test"""
    yield
    logger.remove()


@pytest.fixture
def resolver():
    return FakeResolver()


def write_artifact(artifacts_dir: Path, source: str, name: str, abi=None, bytecode=ESCROW_BYTECODE) -> Path:
    """Write a Hardhat-style artifact and its .dbg.json sibling"""
    contract_dir = artifacts_dir / "contracts" / f"{source}.sol"
    contract_dir.mkdir(parents=True, exist_ok=True)

    path = contract_dir / f"{name}.json"
    with open(path, "w") as f:
        json.dump({
            "_format": "hh-sol-artifact-1",
            "contractName": name,
            "sourceName": f"contracts/{source}.sol",
            "abi": ESCROW_ABI if abi is None else abi,
            "bytecode": bytecode,
            "deployedBytecode": bytecode
        }, f)

    with open(contract_dir / f"{name}.dbg.json", "w") as f:
        json.dump({"_format": "hh-sol-dbg-1", "buildInfo": "../../build-info/abc.json"}, f)

    return path


@pytest.fixture
def artifacts_dir(tmp_path: Path) -> Path:
    """Artifacts tree holding EscrowService and an interface"""
    root = tmp_path / "artifacts"
    write_artifact(root, "EscrowService", "EscrowService")
    write_artifact(root, "IEscrow", "IEscrow", bytecode="0x")
    return root


@pytest.fixture
def make_artifact():
    """Factory fixture writing extra artifacts into a tree"""
    return write_artifact


@pytest.fixture
def escrow_abi():
    return ESCROW_ABI
