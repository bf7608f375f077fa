"""
RPC Manager
Connects to the first reachable RPC endpoint of the target network
"""

from typing import List, Optional
from web3 import Web3
from loguru import logger


class RPCManager:
    """
    Ordered RPC fallback

    Endpoints are tried in order (primary first). The first connected Web3
    instance is cached for the rest of the run.
    """

    def __init__(self, rpc_urls: List[str], request_timeout: int = 30):
        """
        Initialize RPC Manager

        Args:
            rpc_urls: RPC endpoints in priority order
            request_timeout: HTTP request timeout in seconds
        """
        if not rpc_urls:
            raise ValueError("At least one RPC URL is required")

        self.rpc_urls = list(rpc_urls)
        self.request_timeout = request_timeout

        self.w3: Optional[Web3] = None
        self.active_url: Optional[str] = None

    def _create_web3(self, url: str) -> Web3:
        return Web3(Web3.HTTPProvider(url, request_kwargs={'timeout': self.request_timeout}))

    def get_web3(self) -> Web3:
        """
        Get a connected Web3 instance

        Returns:
            Web3 instance

        Raises:
            ConnectionError: if no endpoint is reachable
        """
        if self.w3 is not None:
            return self.w3

        for url in self.rpc_urls:
            try:
                w3 = self._create_web3(url)

                if w3.is_connected():
                    self.w3 = w3
                    self.active_url = url
                    logger.info(f"Connected to {url} (chain id: {w3.eth.chain_id})")
                    return w3

                logger.warning(f"Failed to connect to {url}")

            except Exception as e:
                logger.warning(f"Error connecting to {url}: {e}")

        raise ConnectionError(f"No RPC endpoint reachable ({len(self.rpc_urls)} tried)")
