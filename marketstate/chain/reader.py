"""
Read-only contract access.

ChainReader executes view calls against one contract address/ABI pair and
returns web3's decoded result, or raises one of the errors defined in
marketstate.chain.errors. It never retries; see RetryingChainReader for an
explicit retry policy.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional, Union

from web3 import Web3
from web3.exceptions import ContractLogicError, MismatchedABI, Web3ValidationError

from ..config import ChainConfig
from .abi import EXCHANGE_ABI
from .errors import ConfigurationError, ContractRevertError, ErrorHandler, RpcError

logger = logging.getLogger(__name__)


class ChainReader:
    """
    Executes read-only calls against a configured contract.

    An unresolved contract address is reported as ConfigurationError
    before any RPC traffic happens, so callers can tell a disabled feature
    apart from a failing node.
    """

    def __init__(
        self,
        web3: Optional[Web3],
        contract_address: Optional[str],
        abi: Optional[List[Dict[str, Any]]] = None,
        chain_id: Optional[int] = None,
    ):
        self.web3 = web3
        self.contract_address = contract_address
        self.abi = abi if abi is not None else EXCHANGE_ABI
        self.chain_id = chain_id
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.error_handler = ErrorHandler(self.logger)
        self._contract = None
        self._function_names = {
            entry["name"] for entry in self.abi if entry.get("type") == "function"
        }

    @classmethod
    def for_chain(
        cls,
        chain_config: ChainConfig,
        chain_id: Optional[int] = None,
        abi: Optional[List[Dict[str, Any]]] = None,
    ) -> "ChainReader":
        """
        Build a reader for the exchange deployment on a chain.

        Unsupported chains and chains without an RPC URL or contract address
        still produce a reader; its reads raise ConfigurationError.
        """
        chain_id = chain_id if chain_id is not None else chain_config.DEFAULT_CHAIN_ID
        contract_address = chain_config.get_contract_address(chain_id)
        rpc_url = chain_config.get_rpc_url(chain_id) if chain_config.is_supported_chain(chain_id) else None

        web3 = None
        if rpc_url:
            web3 = Web3(
                Web3.HTTPProvider(
                    rpc_url, request_kwargs={"timeout": chain_config.RPC_TIMEOUT}
                )
            )
        else:
            logger.warning(f"No RPC URL for chain {chain_id}; reads will be rejected")

        return cls(web3, contract_address, abi=abi, chain_id=chain_id)

    @property
    def is_configured(self) -> bool:
        """Whether the reader has both an RPC connection and a contract address."""
        return self.web3 is not None and bool(self.contract_address)

    def _get_contract(self):
        if self._contract is not None:
            return self._contract

        if not self.contract_address:
            raise ConfigurationError(
                f"No contract address configured for chain {self.chain_id}",
                chain_id=self.chain_id,
            )
        if self.web3 is None:
            raise ConfigurationError(
                f"No RPC endpoint configured for chain {self.chain_id}",
                chain_id=self.chain_id,
            )

        try:
            address = Web3.to_checksum_address(self.contract_address)
        except (ValueError, TypeError) as e:
            raise ConfigurationError(
                f"Invalid contract address {self.contract_address!r}: {e}",
                chain_id=self.chain_id,
            ) from e

        self._contract = self.web3.eth.contract(address=address, abi=self.abi)
        return self._contract

    async def read(
        self,
        function_name: str,
        *args: Any,
        block_identifier: Union[int, str] = "latest",
    ) -> Any:
        """
        Execute one view call.

        Args:
            function_name: Contract function to call
            *args: Positional call arguments
            block_identifier: Block to call at

        Returns:
            The decoded return value

        Raises:
            ConfigurationError: Contract address or RPC endpoint not resolved
            ContractRevertError: The contract reverted the call
            RpcError: Any other transport or decoding failure
        """
        if function_name not in self._function_names:
            raise ValueError(f"Function {function_name!r} is not part of the reader ABI")

        contract = self._get_contract()

        try:
            call = getattr(contract.functions, function_name)(*args)
            # web3's HTTP provider blocks; keep it off the event loop
            return await asyncio.to_thread(call.call, block_identifier=block_identifier)
        except ContractLogicError as e:
            error = ContractRevertError(
                f"{function_name} reverted: {e}", function_name=function_name
            )
            self.error_handler.log_error(error, {"function": function_name})
            raise error from e
        except (MismatchedABI, Web3ValidationError) as e:
            # Rejected by web3 before any RPC traffic
            error = RpcError(
                f"{function_name} called with invalid arguments: {e}",
                function_name=function_name,
            )
            self.error_handler.log_error(error, {"function": function_name})
            raise error from e
        except Exception as e:
            error = RpcError(f"{function_name} failed: {e}", function_name=function_name)
            self.error_handler.log_error(error, {"function": function_name})
            raise error from e

    def __repr__(self) -> str:
        return f"ChainReader(chain_id={self.chain_id}, contract={self.contract_address})"
