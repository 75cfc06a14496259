from __future__ import annotations

from dataclasses import dataclass
import logging
import time

import httpx


logger = logging.getLogger(__name__)


FEE_GROWTH_GLOBAL0_SELECTOR = "0xf3058399"
FEE_GROWTH_GLOBAL1_SELECTOR = "0x46141319"
TICKS_SELECTOR = "0xf30dba93"

WORD_HEX_LENGTH = 64
UINT256_MOD = 2**256


class ContractCallError(RuntimeError):
    pass


@dataclass(frozen=True)
class PoolContractClientSettings:
    rpc_url: str
    timeout_seconds: float
    max_retries: int


def encode_int24(value: int) -> str:
    return format(value % UINT256_MOD, "064x")


def decode_words(result: str) -> list[int]:
    raw = result[2:] if result.startswith("0x") else result
    if not raw or len(raw) % WORD_HEX_LENGTH != 0:
        raise ContractCallError(f"Malformed eth_call result: {result!r}")
    return [int(raw[i : i + WORD_HEX_LENGTH], 16) for i in range(0, len(raw), WORD_HEX_LENGTH)]


def _block_tag(block_number: int | None) -> str:
    return hex(block_number) if block_number is not None else "latest"


class PoolContractClient:
    def __init__(self, settings: PoolContractClientSettings):
        self._settings = settings
        self._request_id = 0

    def get_fee_growth_globals(
        self,
        *,
        pool_address: str,
        block_number: int | None = None,
    ) -> tuple[int, int]:
        growth0 = decode_words(
            self._eth_call(to=pool_address, data=FEE_GROWTH_GLOBAL0_SELECTOR, block_number=block_number)
        )[0]
        growth1 = decode_words(
            self._eth_call(to=pool_address, data=FEE_GROWTH_GLOBAL1_SELECTOR, block_number=block_number)
        )[0]
        return growth0, growth1

    def get_tick_fee_growth_outside(
        self,
        *,
        pool_address: str,
        tick_idx: int,
        block_number: int | None = None,
    ) -> tuple[int, int]:
        # ticks() returns liquidityGross, liquidityNet, feeGrowthOutside0X128, feeGrowthOutside1X128, ...
        words = decode_words(
            self._eth_call(
                to=pool_address,
                data=TICKS_SELECTOR + encode_int24(tick_idx),
                block_number=block_number,
            )
        )
        if len(words) < 4:
            raise ContractCallError(f"ticks({tick_idx}) returned {len(words)} words.")
        return words[2], words[3]

    def _eth_call(self, *, to: str, data: str, block_number: int | None) -> str:
        self._request_id += 1
        payload = {
            "jsonrpc": "2.0",
            "id": self._request_id,
            "method": "eth_call",
            "params": [{"to": to, "data": data}, _block_tag(block_number)],
        }
        response = self._post_rpc(payload=payload)
        result = response.get("result")
        if not isinstance(result, str):
            raise ContractCallError(f"eth_call without result for {to}: {response}")
        return result

    def _post_rpc(self, *, payload: dict) -> dict:
        attempts = max(1, self._settings.max_retries)
        delay = 0.25
        last_exc: Exception | None = None

        for attempt in range(1, attempts + 1):
            try:
                with httpx.Client(timeout=self._settings.timeout_seconds) as client:
                    response = client.post(self._settings.rpc_url, json=payload)
                    response.raise_for_status()
                    body = response.json()

                error = body.get("error")
                if error:
                    message = error.get("message", error) if isinstance(error, dict) else error
                    raise RuntimeError(str(message))
                return body
            except (httpx.HTTPError, RuntimeError, ValueError) as exc:
                last_exc = exc
                if attempt == attempts:
                    break
                logger.warning(
                    "pool_contract_client: rpc_retry attempt=%s/%s error=%s",
                    attempt,
                    attempts,
                    exc,
                )
                time.sleep(delay)
                delay *= 2

        raise ContractCallError(f"RPC request failed after retries: {last_exc}") from last_exc
