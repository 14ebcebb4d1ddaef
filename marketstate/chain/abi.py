"""
Read-only ABI fragments for the limit-order exchange contract.
"""

from typing import Any, Dict, List

# Exclusive upper bound of a uint256 argument
UINT256_LIMIT = 2 ** 256

_TOKEN_INFO_COMPONENTS = [
    {"internalType": "address", "name": "tokenAddress", "type": "address"},
    {"internalType": "bool", "name": "isActive", "type": "bool"},
]

_ORDER_DETAILS_COMPONENTS = [
    {"internalType": "address", "name": "sellToken", "type": "address"},
    {"internalType": "uint256", "name": "sellAmount", "type": "uint256"},
    {"internalType": "uint256[]", "name": "buyTokensIndex", "type": "uint256[]"},
    {"internalType": "uint256[]", "name": "buyAmounts", "type": "uint256[]"},
    {"internalType": "uint256", "name": "expirationTime", "type": "uint256"},
]

_ORDER_DETAILS_WITH_ID_COMPONENTS = [
    {"internalType": "uint256", "name": "orderId", "type": "uint256"},
    {"internalType": "uint256", "name": "remainingFillPercentage", "type": "uint256"},
    {"internalType": "uint256", "name": "redeemedPercentage", "type": "uint256"},
    {"internalType": "uint32", "name": "lastUpdateTime", "type": "uint32"},
    {"internalType": "uint8", "name": "status", "type": "uint8"},
    {"internalType": "uint256", "name": "creationProtocolFee", "type": "uint256"},
    {
        "components": _ORDER_DETAILS_COMPONENTS,
        "internalType": "struct OrderDetails",
        "name": "orderDetails",
        "type": "tuple",
    },
]

WHITELIST_ABI: List[Dict[str, Any]] = [
    {
        "inputs": [],
        "name": "viewCountWhitelisted",
        "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [
            {"internalType": "uint256", "name": "cursor", "type": "uint256"},
            {"internalType": "uint256", "name": "size", "type": "uint256"},
        ],
        "name": "viewWhitelisted",
        "outputs": [
            {
                "components": _TOKEN_INFO_COMPONENTS,
                "internalType": "struct TokenInfo[]",
                "name": "",
                "type": "tuple[]",
            },
            {"internalType": "uint256", "name": "", "type": "uint256"},
        ],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [{"internalType": "uint256", "name": "_index", "type": "uint256"}],
        "name": "getTokenInfoAt",
        "outputs": [
            {"internalType": "address", "name": "", "type": "address"},
            {"internalType": "bool", "name": "", "type": "bool"},
        ],
        "stateMutability": "view",
        "type": "function",
    },
]

ORDERS_ABI: List[Dict[str, Any]] = [
    {
        "inputs": [],
        "name": "getTotalOrderCount",
        "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [{"internalType": "uint256", "name": "_orderId", "type": "uint256"}],
        "name": "getOrderDetails",
        "outputs": [
            {
                "components": [
                    {
                        "components": [
                            {"internalType": "uint256", "name": "orderIndex", "type": "uint256"},
                            {"internalType": "address", "name": "orderOwner", "type": "address"},
                        ],
                        "internalType": "struct UserOrderDetails",
                        "name": "userDetails",
                        "type": "tuple",
                    },
                    {
                        "components": _ORDER_DETAILS_WITH_ID_COMPONENTS,
                        "internalType": "struct OrderDetailsWithId",
                        "name": "orderDetailsWithId",
                        "type": "tuple",
                    },
                ],
                "internalType": "struct CompleteOrderDetails",
                "name": "",
                "type": "tuple",
            }
        ],
        "stateMutability": "view",
        "type": "function",
    },
]

EXCHANGE_ABI: List[Dict[str, Any]] = WHITELIST_ABI + ORDERS_ABI
