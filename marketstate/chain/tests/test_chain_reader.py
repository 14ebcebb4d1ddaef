"""Tests for contract reads and the retry policy."""
import pytest
from unittest.mock import AsyncMock, MagicMock

from web3.exceptions import ContractLogicError, MismatchedABI

from marketstate.chain import (
    ChainReader,
    ConfigurationError,
    ContractRevertError,
    ErrorHandler,
    NotFoundError,
    RetryConfig,
    RetryingChainReader,
    RpcError,
)
from marketstate.config import ChainConfig

CONTRACT = "0xc8a47f14b1833310e2ac72e4c397b5b14a9fef8b"


def make_reader(call_result=None, call_error=None):
    """Build a ChainReader over a mocked web3 contract."""
    web3 = MagicMock()
    contract = MagicMock()
    web3.eth.contract.return_value = contract

    def function(*args):
        call = MagicMock()
        if call_error is not None:
            call.call.side_effect = call_error
        else:
            call.call.return_value = call_result
        return call

    contract.functions.viewCountWhitelisted.side_effect = function
    contract.functions.viewWhitelisted.side_effect = function
    return ChainReader(web3, CONTRACT, chain_id=369), web3


class TestChainReader:
    """Test cases for ChainReader."""

    @pytest.mark.asyncio
    async def test_read_returns_decoded_value(self):
        reader, web3 = make_reader(call_result=7)

        assert await reader.read("viewCountWhitelisted") == 7
        web3.eth.contract.assert_called_once()

    @pytest.mark.asyncio
    async def test_missing_address_fails_before_rpc(self):
        web3 = MagicMock()
        reader = ChainReader(web3, None, chain_id=943)

        with pytest.raises(ConfigurationError) as exc_info:
            await reader.read("viewCountWhitelisted")

        assert exc_info.value.chain_id == 943
        web3.eth.contract.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_rpc_is_configuration_error(self):
        reader = ChainReader(None, CONTRACT, chain_id=1)

        assert reader.is_configured is False
        with pytest.raises(ConfigurationError):
            await reader.read("viewCountWhitelisted")

    @pytest.mark.asyncio
    async def test_invalid_address_is_configuration_error(self):
        reader = ChainReader(MagicMock(), "not-an-address", chain_id=369)

        with pytest.raises(ConfigurationError, match="Invalid contract address"):
            await reader.read("viewCountWhitelisted")

    @pytest.mark.asyncio
    async def test_revert_maps_to_contract_revert_error(self):
        reader, _ = make_reader(call_error=ContractLogicError("execution reverted"))

        with pytest.raises(ContractRevertError) as exc_info:
            await reader.read("viewWhitelisted", 0, 10)

        assert exc_info.value.function_name == "viewWhitelisted"
        assert isinstance(exc_info.value, RpcError)

    @pytest.mark.asyncio
    async def test_transport_failure_maps_to_rpc_error(self):
        reader, _ = make_reader(call_error=OSError("connection refused"))

        with pytest.raises(RpcError, match="viewCountWhitelisted failed"):
            await reader.read("viewCountWhitelisted")

    @pytest.mark.asyncio
    async def test_argument_validation_maps_to_rpc_error(self):
        reader, web3 = make_reader(call_result=1)
        contract = web3.eth.contract.return_value
        contract.functions.viewWhitelisted.side_effect = MismatchedABI(
            "Could not identify the intended function with name viewWhitelisted"
        )

        with pytest.raises(RpcError, match="invalid arguments") as exc_info:
            await reader.read("viewWhitelisted", 2**256, 10)

        assert ErrorHandler().classify_error(exc_info.value) == "validation"

    @pytest.mark.asyncio
    async def test_argument_validation_is_not_retried(self):
        reader, web3 = make_reader(call_result=1)
        contract = web3.eth.contract.return_value
        contract.functions.viewWhitelisted.side_effect = MismatchedABI("bad uint256")
        retrying = RetryingChainReader(reader, RetryConfig(max_retries=3, retry_delay=0))

        with pytest.raises(RpcError):
            await retrying.read("viewWhitelisted", 2**256, 10)

        assert contract.functions.viewWhitelisted.call_count == 1

    @pytest.mark.asyncio
    async def test_unknown_function_is_rejected(self):
        reader, _ = make_reader(call_result=1)

        with pytest.raises(ValueError):
            await reader.read("transfer")

    def test_for_chain_without_rpc_url(self):
        chains = ChainConfig(CONTRACT_ADDRESS=CONTRACT, ETHEREUM_RPC_URL=None)
        reader = ChainReader.for_chain(chains, 1)

        assert reader.web3 is None
        assert reader.contract_address == CONTRACT
        assert reader.is_configured is False

    def test_for_chain_unsupported_chain_has_no_address(self):
        chains = ChainConfig(TESTING_MODE=False)
        reader = ChainReader.for_chain(chains, 943)

        assert reader.contract_address is None
        assert reader.chain_id == 943


class TestRetryingChainReader:
    """Test cases for the retry wrapper."""

    @pytest.fixture
    def inner(self):
        reader = MagicMock()
        reader.read = AsyncMock()
        return reader

    @pytest.mark.asyncio
    async def test_retries_transient_rpc_errors(self, inner):
        inner.read.side_effect = [RpcError("connection refused"), 5]
        reader = RetryingChainReader(inner, RetryConfig(max_retries=3, retry_delay=0))

        assert await reader.read("viewCountWhitelisted") == 5
        assert inner.read.call_count == 2

    @pytest.mark.asyncio
    async def test_gives_up_after_max_retries(self, inner):
        inner.read.side_effect = RpcError("timeout")
        reader = RetryingChainReader(inner, RetryConfig(max_retries=3, retry_delay=0))

        with pytest.raises(RpcError):
            await reader.read("viewCountWhitelisted")
        assert inner.read.call_count == 3

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [
            ConfigurationError("no address"),
            NotFoundError("missing"),
            ContractRevertError("viewWhitelisted reverted"),
        ],
    )
    async def test_permanent_errors_are_not_retried(self, inner, error):
        inner.read.side_effect = error
        reader = RetryingChainReader(inner, RetryConfig(max_retries=3, retry_delay=0))

        with pytest.raises(type(error)):
            await reader.read("viewWhitelisted", 0, 10)
        assert inner.read.call_count == 1

    @pytest.mark.parametrize("kwargs", [{"max_retries": 0}, {"retry_delay": -1}])
    def test_retry_config_validation(self, kwargs):
        with pytest.raises(ValueError):
            RetryConfig(**kwargs)


class TestErrorHandler:
    """Test cases for error classification."""

    @pytest.fixture
    def handler(self):
        return ErrorHandler()

    def test_classify_error(self, handler):
        assert handler.classify_error(ConfigurationError("x")) == "configuration"
        assert handler.classify_error(NotFoundError("x")) == "not_found"
        assert handler.classify_error(RpcError("429 Too Many Requests")) == "rate_limit"
        assert handler.classify_error(RpcError("read timed out")) == "network"
        assert handler.classify_error(RpcError("execution reverted")) == "contract"
        assert handler.classify_error(RpcError("boom")) == "unknown"

    def test_retry_delay_backs_off(self, handler):
        error = RpcError("connection reset")

        assert handler.get_retry_delay(error, 0) == 1.0
        assert handler.get_retry_delay(error, 2) == 4.0
        assert handler.get_retry_delay(error, 10) == 60
        assert handler.get_retry_delay(RpcError("rate limit"), 1) == 4.0
