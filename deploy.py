"""
Contract Deployment
Deploys the configured contract and exits 0 on success, 1 on failure

Usage: python deploy.py
"""

import asyncio
import sys
from loguru import logger

from blockchain.artifacts import ArtifactLoader
from blockchain.contract_factory import Web3FactoryResolver
from deployer.orchestrator import DeploymentOrchestrator
from deployer.types import DeploymentResult
from utils.config import DEFAULT_CONFIG_PATH, load_config
from utils.logging_setup import configure_logging
from utils.rpc_manager import RPCManager


async def run(config_path: str = DEFAULT_CONFIG_PATH) -> DeploymentResult:
    """Wire the web3 collaborator into the orchestrator and deploy"""
    config = load_config(config_path)

    resolver = Web3FactoryResolver(
        RPCManager(config.rpc_urls),
        ArtifactLoader(config.artifacts_dir),
        config
    )
    orchestrator = DeploymentOrchestrator(resolver, network_name=config.network_name)

    return await orchestrator.deploy(config.contract_name)


def main() -> int:
    """Entry point, returns the process exit code"""
    configure_logging()

    try:
        result = asyncio.run(run())
    except KeyboardInterrupt:
        logger.warning("Interrupted - a submitted transaction may still be pending on the network")
        return 1
    except (ValueError, OSError) as e:
        # Configuration problems happen before the orchestrator takes over
        logger.error(f"Error during deployment: {e}")
        return 1

    return 0 if result.ok else 1


if __name__ == "__main__":
    sys.exit(main())
