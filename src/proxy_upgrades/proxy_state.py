"""Proxy state inspection over JSON-RPC for proxy-upgrades library."""

from typing import Any, List

import requests

from .constants import ADMIN_SLOT, BEACON_SLOT, IMPLEMENTATION_SLOT, RPC_TIMEOUT
from .exceptions import ExternalServiceError


class ProxyStateInspector:
    """Reads EIP-1967 proxy slots from a live chain."""

    def __init__(self, rpc_url: str):
        """
        Initialize the inspector.

        Args:
            rpc_url: JSON-RPC endpoint URL
        """
        self.rpc_url = rpc_url

    def _call(self, method: str, params: List[Any]) -> Any:
        try:
            response = requests.post(
                self.rpc_url,
                json={
                    "jsonrpc": "2.0",
                    "method": method,
                    "params": params,
                    "id": 1,
                },
                timeout=RPC_TIMEOUT,
            )

            if response.status_code != 200:
                raise ExternalServiceError(
                    f"RPC request {method} failed with status {response.status_code}"
                )

            result = response.json()

            if "error" in result:
                raise ExternalServiceError(f"RPC error in {method}: {result['error']}")

            return result["result"]

        except requests.RequestException as e:
            raise ExternalServiceError(f"Network error during RPC call {method}: {e}") from e
        except (KeyError, ValueError) as e:
            raise ExternalServiceError(f"Malformed RPC response for {method}: {e}") from e

    def _call_hex(self, method: str, params: List[Any]) -> int:
        value = self._call(method, params)
        if not isinstance(value, str) or not value.startswith("0x"):
            raise ExternalServiceError(f"Malformed RPC result for {method}: {value!r}")
        try:
            return int(value, 16)
        except ValueError as e:
            raise ExternalServiceError(f"Malformed RPC result for {method}: {value!r}") from e

    def _read_address_slot(self, proxy_address: str, slot: str) -> str:
        value = self._call_hex("eth_getStorageAt", [proxy_address, slot, "latest"])
        # Address is the low 20 bytes of the 32-byte slot
        return "0x" + format(value, "064x")[-40:]

    def get_admin_address(self, proxy_address: str) -> str:
        """Get the admin address of a transparent proxy (zero for UUPS proxies)."""
        return self._read_address_slot(proxy_address, ADMIN_SLOT)

    def get_implementation_address(self, proxy_address: str) -> str:
        """Get the implementation address of a proxy."""
        return self._read_address_slot(proxy_address, IMPLEMENTATION_SLOT)

    def get_beacon_address(self, proxy_address: str) -> str:
        """Get the beacon address of a beacon proxy."""
        return self._read_address_slot(proxy_address, BEACON_SLOT)

    def get_chain_id(self) -> int:
        """Get the chain ID of the connected network."""
        return self._call_hex("eth_chainId", [])
