"""
Solver client - HTTP boundary to the recognition/solving service.

Sends a PNG snapshot of the drawing plus the known variable bindings and
returns the validated list of solved expressions.
"""
import json
import logging
from typing import Dict, List, Optional

import httpx
from pydantic import ValidationError

from api.schemas import SolveRequest, SolveResponse, SolveResultItem
from core.constants import SOLVER_ENDPOINT
from core.exceptions import MalformedResponseError, SolverUnavailableError

logger = logging.getLogger(__name__)


class SolverClient:
    """
    Async client for the solving service.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8900",
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None
    ):
        """
        Initialize solver client.

        Args:
            base_url: Solving service URL
            timeout: Request timeout in seconds (default: 30)
            client: Pre-built httpx client (tests pass one with a mock transport)
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout

        self.client = client or httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout)
        )

    async def solve(self, image_data_url: str, variables: Dict[str, str]) -> List[SolveResultItem]:
        """
        Ask the service to recognise and solve a drawing.

        Args:
            image_data_url: "data:image/png;base64,..." snapshot of the raster
            variables: Variable bindings from earlier submissions

        Returns:
            Solved expressions in the order the service returned them

        Raises:
            SolverUnavailableError: Connection failure, timeout, HTTP error or non-JSON body
            MalformedResponseError: Body does not match the result schema
        """
        payload = SolveRequest(image=image_data_url, variables=variables)

        try:
            response = await self.client.post(
                SOLVER_ENDPOINT,
                json=payload.model_dump(by_alias=True)
            )
            response.raise_for_status()
            body = response.json()

        except httpx.TimeoutException as e:
            raise SolverUnavailableError(
                f"Solving service at {self.base_url} timed out after {self.timeout}s"
            ) from e
        except httpx.HTTPStatusError as e:
            raise SolverUnavailableError(
                f"Solving service returned error: {e.response.status_code} - {e.response.text}"
            ) from e
        except httpx.HTTPError as e:
            raise SolverUnavailableError(
                f"Could not connect to solving service at {self.base_url}. Error: {e}"
            ) from e
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise SolverUnavailableError(
                f"Invalid JSON response from solving service: {response.text[:200]}"
            ) from e

        try:
            parsed = SolveResponse.model_validate(body)
        except ValidationError as e:
            raise MalformedResponseError(
                f"Solving service response does not match the expected schema: {e}"
            ) from e

        logger.info("Solver returned %d result(s)", len(parsed.data))
        return list(parsed.data)

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()
