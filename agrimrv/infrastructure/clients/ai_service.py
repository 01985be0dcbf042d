"""AI classification service HTTP client for fetching analysis results"""

import httpx
from datetime import datetime
from typing import List
from agrimrv.domain.models import AIAnalysisResult
from agrimrv.domain.exceptions import AIServiceError
from agrimrv.config import settings
from agrimrv.infrastructure.observability.metrics import ai_fetch_latency_histogram


class AIServiceClient:
    """Client for the external AI image classification service"""

    def __init__(self, base_url: str | None = None, timeout: float | None = None):
        self.base_url = base_url or settings.ai_service_base
        self.timeout = timeout or settings.http_timeout_seconds

    async def get_results(self, profile_id: str) -> List[AIAnalysisResult]:
        """
        Fetch every scored evidence submission for a farm profile.

        Raises:
            AIServiceError: On timeout, HTTP errors, or invalid response
        """
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                with ai_fetch_latency_histogram.time():
                    response = await client.get(
                        f"{self.base_url}/ai/results",
                        params={"profile_id": profile_id},
                    )
                response.raise_for_status()
                data = response.json()

                return [
                    AIAnalysisResult(
                        image_score=float(item["image_score"]),
                        credit_risk_score=float(item["credit_score"]),
                        processed_at=datetime.fromisoformat(item["processed_at"]) if item.get("processed_at") else None,
                        yield_risk=float(item["yield_risk"]) if item.get("yield_risk") is not None else None,
                    )
                    for item in data.get("results", [])
                ]

            except httpx.TimeoutException as e:
                raise AIServiceError(f"AI service timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise AIServiceError(f"AI service error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise AIServiceError(f"AI service unreachable: {e}") from e
            except (KeyError, ValueError, TypeError) as e:
                raise AIServiceError(f"Invalid analysis data from AI service: {e}") from e
