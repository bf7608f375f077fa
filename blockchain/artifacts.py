"""
Artifact Loader
Looks up compiled Hardhat artifacts by contract name
"""

import json
from pathlib import Path
from typing import Dict, List
from loguru import logger

from deployer.exceptions import ArtifactNotFound
from deployer.types import ContractArtifact


class ArtifactLoader:
    """
    Reads artifacts produced by `npx hardhat compile`

    Layout: <artifacts_dir>/contracts/<Source>.sol/<Name>.json
    """

    def __init__(self, artifacts_dir: Path = Path("artifacts")):
        """
        Initialize Artifact Loader

        Args:
            artifacts_dir: Hardhat artifacts directory
        """
        self.artifacts_dir = Path(artifacts_dir)
        self._cache: Dict[str, ContractArtifact] = {}

    def load(self, contract_name: str) -> ContractArtifact:
        """
        Load the artifact for a contract

        Args:
            contract_name: Contract name (e.g. "EscrowService")

        Returns:
            ContractArtifact

        Raises:
            ArtifactNotFound: unknown name, ambiguous name or undeployable artifact
        """
        if contract_name in self._cache:
            return self._cache[contract_name]

        path = self._find_artifact_file(contract_name)

        with open(path, 'r') as f:
            contract_json = json.load(f)

        abi = contract_json.get('abi')
        bytecode = contract_json.get('bytecode') or ''

        if abi is None:
            raise ArtifactNotFound(f"Artifact has no ABI: {path}")

        # Interfaces and abstract contracts compile to "0x"
        if bytecode in ('', '0x'):
            raise ArtifactNotFound(f"{contract_name} has no deployable bytecode (abstract contract or interface?)")

        artifact = ContractArtifact(
            name=contract_json.get('contractName', contract_name),
            abi=abi,
            bytecode=bytecode,
            source_path=path
        )

        self._cache[contract_name] = artifact
        logger.debug(f"Loaded artifact {contract_name} from {path}")
        return artifact

    def _find_artifact_file(self, contract_name: str) -> Path:
        contracts_dir = self.artifacts_dir / "contracts"

        if not contracts_dir.is_dir():
            raise ArtifactNotFound(
                f"Artifacts directory not found: {contracts_dir} (run 'npx hardhat compile' first)"
            )

        if '/' in contract_name or '\\' in contract_name:
            raise ArtifactNotFound(f"Invalid contract name: {contract_name}")

        # Compared literally, so glob characters in the name never match
        file_name = f"{contract_name}.json"
        candidates: List[Path] = sorted(
            path for path in contracts_dir.rglob("*.json") if path.name == file_name
        )

        if not candidates:
            raise ArtifactNotFound(f"Contract artifact not found: {contract_name}")

        if len(candidates) > 1:
            locations = ', '.join(str(p.relative_to(contracts_dir)) for p in candidates)
            raise ArtifactNotFound(f"Contract name {contract_name} is ambiguous: {locations}")

        return candidates[0]
