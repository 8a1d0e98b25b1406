"""
Actuator Transport

Delivers step commands to the motor controller over HTTP:

    POST {base_url}/steps?azimuthMotorSteps=<int>&altitudeMotorSteps=<int>

with an empty body. Delivery is fire-and-forget: the response payload is
not interpreted and failed deliveries are not retried.
"""

from typing import Optional

import httpx

from .errors import TransportError
from .motion import StepCommand

STEPS_PATH = "/steps"
CORS_HEADERS = {"Access-Control-Allow-Origin": "*"}


class StepTransport:
    """
    HTTP client for the actuator /steps endpoint.

    Attributes:
        base_url (str): Controller URL, e.g. http://192.168.4.1
        timeout (float): Request timeout in seconds.
        client (httpx.AsyncClient): Shared client; created on first use when
            not supplied, and then closed by close().
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.client = client
        self._owns_client = client is None

    @classmethod
    def from_config(cls, config: dict) -> "StepTransport":
        act_cfg = config.get("actuator") or {}
        return cls(act_cfg.get("url", "http://localhost:8080"), act_cfg.get("timeout", 5.0))

    @property
    def url(self) -> str:
        return self.base_url + STEPS_PATH

    async def send(self, command: StepCommand, strict: bool = False) -> bool:
        """
        Posts a step command to the actuator.

        Args:
            command (StepCommand): Steps to execute.
            strict (bool): Raise TransportError instead of returning False.

        Returns:
            bool: True if the controller accepted the request.
        """
        if self.client is None:
            self.client = httpx.AsyncClient(timeout=self.timeout)
            self._owns_client = True

        try:
            resp = await self.client.post(
                self.url,
                params=command.as_query_params(),
                headers=CORS_HEADERS,
                timeout=self.timeout,
            )
            resp.raise_for_status()
            return True
        except httpx.HTTPStatusError as e:
            print(f"Transport: Controller rejected {command}: HTTP {e.response.status_code}")
            if strict:
                raise TransportError(
                    "Controller rejected step command",
                    url=self.url,
                    status=e.response.status_code,
                )
            return False
        except httpx.HTTPError as e:
            print(f"Transport: Error sending {command}: {type(e).__name__}: {e}")
            if strict:
                raise TransportError(f"Cannot reach controller: {e}", url=self.url)
            return False

    async def close(self) -> None:
        if self.client is not None and self._owns_client:
            await self.client.aclose()
            self.client = None

    async def __aenter__(self) -> "StepTransport":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.close()
