"""
Chain and contract configuration for marketstate.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from .base import BaseConfig, ConfigError


PULSECHAIN_CHAIN_ID = 369
PULSECHAIN_TESTNET_CHAIN_ID = 943
ETHEREUM_CHAIN_ID = 1


@dataclass
class ChainConfig(BaseConfig):
    """
    Chain-specific configuration: RPC endpoints and the exchange contract
    deployment for each supported chain.

    TESTING_MODE exposes the PulseChain testnet. It is a plain field, so
    callers that need a different setup build their own ChainConfig instead
    of flipping shared state.
    """

    DEFAULT_CHAIN_ID: int = BaseConfig.get_env_int("DEFAULT_CHAIN_ID", PULSECHAIN_CHAIN_ID)
    TESTING_MODE: bool = BaseConfig.get_env_bool("TESTING_MODE", False)

    # Exchange contract, shared by every chain it is deployed on
    CONTRACT_ADDRESS: Optional[str] = BaseConfig.get_env_optional(
        "CONTRACT_ADDRESS", "0xc8a47F14b1833310E2aC72e4C397b5b14a9FEf8B"
    )

    # Chain-specific RPC URLs
    PULSECHAIN_RPC_URL: str = BaseConfig.get_env(
        "PULSECHAIN_RPC_URL", "https://rpc.pulsechain.com"
    )
    PULSECHAIN_TESTNET_RPC_URL: str = BaseConfig.get_env(
        "PULSECHAIN_TESTNET_RPC_URL", "https://pulsechain-testnet-rpc.publicnode.com"
    )
    ETHEREUM_RPC_URL: Optional[str] = BaseConfig.get_env_optional("ETHEREUM_RPC_URL")

    # Per-call RPC timeout in seconds
    RPC_TIMEOUT: int = BaseConfig.get_env_int("RPC_TIMEOUT", 10)

    @property
    def supported_chains(self) -> Dict[int, Dict]:
        """Get configuration for all chains enabled under the current mode."""
        chains = {
            PULSECHAIN_CHAIN_ID: {
                "name": "PulseChain",
                "rpc_url": self.PULSECHAIN_RPC_URL,
                "contract_address": self.CONTRACT_ADDRESS,
                "explorer_url": "https://scan.pulsechain.com",
                "testnet": False,
            },
            ETHEREUM_CHAIN_ID: {
                "name": "Ethereum",
                "rpc_url": self.ETHEREUM_RPC_URL,
                "contract_address": self.CONTRACT_ADDRESS,
                "explorer_url": "https://etherscan.io",
                "testnet": False,
            },
        }
        if self.TESTING_MODE:
            chains[PULSECHAIN_TESTNET_CHAIN_ID] = {
                "name": "PLS Testnet",
                "rpc_url": self.PULSECHAIN_TESTNET_RPC_URL,
                "contract_address": self.CONTRACT_ADDRESS,
                "explorer_url": "https://scan.v4.testnet.pulsechain.com",
                "testnet": True,
            }
        return chains

    def is_supported_chain(self, chain_id: Optional[int]) -> bool:
        """Check whether a chain id has a deployment under the current mode."""
        return chain_id is not None and chain_id in self.supported_chains

    def get_chain_config(self, chain_id: int) -> Dict:
        """Get configuration for a specific chain."""
        if not self.is_supported_chain(chain_id):
            raise ConfigError(f"Unsupported chain: {chain_id}")
        return self.supported_chains[chain_id]

    def get_rpc_url(self, chain_id: int) -> Optional[str]:
        """Get RPC URL for a specific chain."""
        return self.get_chain_config(chain_id)["rpc_url"]

    def get_contract_address(self, chain_id: Optional[int]) -> Optional[str]:
        """
        Get the exchange contract address for a chain.

        Returns None when the chain is unknown or no address is configured,
        which readers report as a configuration failure.
        """
        if not self.is_supported_chain(chain_id):
            return None
        address = self.supported_chains[chain_id]["contract_address"]
        if not address or not address.strip():
            return None
        return address.strip()

    def get_chain_display_name(self, chain_id: Optional[int]) -> str:
        """Get display name for a chain id."""
        if not self.is_supported_chain(chain_id):
            return "Unknown Network"
        return self.supported_chains[chain_id]["name"]

    def available_chain_ids(self) -> List[int]:
        """Chain ids offered to callers, testnet first when enabled."""
        chain_ids = [PULSECHAIN_CHAIN_ID]
        if self.TESTING_MODE:
            chain_ids.insert(0, PULSECHAIN_TESTNET_CHAIN_ID)
        return chain_ids
