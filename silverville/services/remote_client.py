"""
Remote scoring/record service client

Thin async wrapper over the SilverVille HTTP API. Every call retries
transient failures and raises RemoteServiceError once it gives up; callers
decide which local substitute to use.
"""

from typing import Any, Dict, List, Optional
import logging

import httpx

from silverville import config
from silverville.exceptions import RemoteServiceError, wrap_external_exception
from silverville.models.quiz import QuizItem
from silverville.resilience.retry import retry_with_backoff

logger = logging.getLogger(__name__)


class RemoteClient:
    """Client for diet analysis, quiz catalog, barista sessions and activity records"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        max_retries: Optional[int] = None
    ):
        self.base_url = (base_url or config.REMOTE_API_URL).rstrip("/")
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout or config.REMOTE_API_TIMEOUT,
            headers={"Content-Type": "application/json"},
        )
        self._retry_kwargs = {} if max_retries is None else {"max_retries": max_retries}

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> 'RemoteClient':
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
        return False

    async def _request(self, method: str, path: str, operation: str, **kwargs: Any) -> Any:
        async def send() -> httpx.Response:
            response = await self._client.request(method, path, **kwargs)
            response.raise_for_status()
            return response

        try:
            response = await retry_with_backoff(send, **self._retry_kwargs)
            return response.json() if response.content else None
        except httpx.HTTPError as e:
            raise wrap_external_exception(e, operation=operation, context={"path": path})
        except ValueError as e:
            raise RemoteServiceError(
                message=f"Malformed response from {path}: {e}",
                operation=operation,
                cause=e
            )

    # ==========================================
    # Diet
    # ==========================================

    async def analyze_diet(self, image_b64: str) -> Dict[str, Any]:
        """
        Score a meal photo

        Returns:
            {'mindScore': float, 'detectedItems': list[str]}
        """
        data = await self._request("POST", "/diet/analyze", "analyze_diet", json={"image": image_b64})
        if not isinstance(data, dict) or "mindScore" not in data:
            raise RemoteServiceError(message="Diet analysis response missing mindScore", operation="analyze_diet")
        return {
            "mindScore": float(data["mindScore"]),
            "detectedItems": list(data.get("detectedItems", [])),
        }

    async def record_diet(self, mind_score: float, items: List[str], fertilizer: int) -> None:
        await self._request(
            "POST", "/diet/record", "record_diet",
            json={"mindScore": mind_score, "items": items, "fertilizer": fertilizer},
        )

    # ==========================================
    # Walking
    # ==========================================

    async def get_quiz_catalog(self) -> List[QuizItem]:
        data = await self._request("GET", "/walk/quizzes", "get_quiz_catalog")
        if not isinstance(data, list):
            raise RemoteServiceError(message="Quiz catalog response is not a list", operation="get_quiz_catalog")
        try:
            return [
                QuizItem(
                    id=str(q["id"]),
                    prompt=q["question"],
                    choices=q["choices"],
                    correct_choice=q["answer"],
                    explanation=q.get("hint"),
                )
                for q in data
            ]
        except (KeyError, TypeError, ValueError) as e:
            raise RemoteServiceError(
                message=f"Invalid quiz in remote catalog: {e}",
                operation="get_quiz_catalog",
                cause=e
            )

    async def complete_walk(self, steps: int) -> None:
        await self._request("POST", "/walk/complete", "complete_walk", json={"steps": steps})

    # ==========================================
    # Cafe
    # ==========================================

    async def get_barista_session(self) -> Dict[str, Any]:
        data = await self._request("GET", "/barista/session", "get_barista_session")
        if not isinstance(data, dict):
            raise RemoteServiceError(message="Barista session response is not an object", operation="get_barista_session")
        return data
