"""
Deployment Exceptions
Error taxonomy shared by the orchestrator and the web3 collaborator
"""


class DeploymentError(Exception):
    """Base exception for contract deployment errors"""

    pass


class ArtifactNotFound(DeploymentError, LookupError):
    """Raised when a contract name does not resolve to a compiled artifact"""

    pass


class TransactionRejected(DeploymentError):
    """Raised when the node rejects or reverts the creation transaction"""

    pass


class ConfirmationTimeout(DeploymentError, TimeoutError):
    """Raised when the creation transaction is not mined in time"""

    pass


class UnexpectedDeploymentFailure(DeploymentError):
    """Wraps any other error raised while deploying"""

    pass
