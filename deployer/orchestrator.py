"""
Deployment Orchestrator
Resolves a contract factory, submits the creation transaction and waits for confirmation
"""

from loguru import logger

from .exceptions import ArtifactNotFound, DeploymentError, UnexpectedDeploymentFailure
from .types import DeploymentResult, FactoryResolver


class DeploymentOrchestrator:
    """
    Runs one contract deployment end to end

    The flow is submit -> confirm. Errors are never retried here; every
    failure short-circuits into a failed DeploymentResult. A transaction that
    was already submitted cannot be cancelled and stays on the network.
    """

    def __init__(self, resolver: FactoryResolver, network_name: str = "network"):
        """
        Initialize Deployment Orchestrator

        Args:
            resolver: Collaborator that turns contract names into factories
            network_name: Human readable network name used in log lines
        """
        self.resolver = resolver
        self.network_name = network_name

    async def deploy(self, contract_name: str) -> DeploymentResult:
        """
        Deploy a new instance of a zero-argument contract

        Args:
            contract_name: Symbolic contract name (e.g. "EscrowService")

        Returns:
            DeploymentResult holding the deployed address or the error
        """
        logger.info(f"Deploying {contract_name} contract to {self.network_name}...")

        try:
            if not contract_name or not contract_name.strip():
                raise ArtifactNotFound("Contract name must be a non-empty string")

            factory = self.resolver.resolve_factory(contract_name)

            pending = await factory.deploy_new()
            logger.info(f"Transaction sent: {pending.handle.transaction_hash}")
            logger.info("Waiting for confirmation...")

            instance = await pending.await_confirmation()
            address = instance.address

        except DeploymentError as e:
            return self._failed(contract_name, e)
        except Exception as e:
            wrapped = UnexpectedDeploymentFailure(f"{type(e).__name__}: {e}")
            wrapped.__cause__ = e
            return self._failed(contract_name, wrapped)

        logger.success(f"{contract_name} deployed to: {address}")
        logger.success("Deployment completed successfully!")

        return DeploymentResult(contract_name=contract_name, address=address)

    def _failed(self, contract_name: str, error: DeploymentError) -> DeploymentResult:
        logger.error(f"Error during deployment: {error}")
        return DeploymentResult(contract_name=contract_name, error=error)
