"""Submission layer: hands requests to the management API."""
import asyncio
import json
import logging
from abc import ABC, abstractmethod
from typing import List, Optional

import requests

from ..config import Config
from ..utils import RetryError, async_retry, redact_sensitive_data
from .models import ApiRequest, SubmissionResult

logger = logging.getLogger(__name__)


class Submitter(ABC):
    """Sends requests and reports the outcome without raising on HTTP errors."""

    @abstractmethod
    async def submit(self, request: ApiRequest) -> SubmissionResult:
        ...


class DryRunSubmitter(Submitter):
    """Records requests instead of sending them."""

    def __init__(self, status_code: int = 202, text: str = ''):
        self.requests: List[ApiRequest] = []
        self.status_code = status_code
        self.text = text

    async def submit(self, request: ApiRequest) -> SubmissionResult:
        self.requests.append(request)
        logger.debug(f"🧪 Would {request.method} {request.path}")
        return SubmissionResult(status_code=self.status_code, text=self.text)


class HttpSubmitter(Submitter):
    """Submits requests over HTTP with ``requests``, retrying transport failures."""

    def __init__(
        self,
        api_url: Optional[str] = None,
        user: Optional[str] = None,
        password: Optional[str] = None,
        timeout: Optional[int] = None,
        max_retries: Optional[int] = None,
        retry_delay: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.api_url = (api_url or Config.API_URL).rstrip('/')
        self.timeout = timeout or Config.API_TIMEOUT
        self.max_retries = Config.MAX_RETRIES if max_retries is None else max_retries
        self.retry_delay = Config.RETRY_DELAY if retry_delay is None else retry_delay
        self.session = session or requests.Session()
        self.session.auth = (user or Config.API_USER, password or Config.API_PASSWORD)
        self.session.headers.update({'X-Requested-By': Config.REQUESTED_BY})

    def _send(self, request: ApiRequest) -> requests.Response:
        data = json.dumps(request.body) if request.body is not None else None
        return self.session.request(
            request.method,
            f"{self.api_url}{request.path}",
            data=data,
            timeout=self.timeout,
        )

    async def submit(self, request: ApiRequest) -> SubmissionResult:
        logger.debug(f"{request.method} {request.path}: {json.dumps(redact_sensitive_data(request.body))}")

        @async_retry(
            max_retries=self.max_retries,
            delay=self.retry_delay,
            exceptions=(requests.ConnectionError, requests.Timeout),
        )
        async def _submit_with_retry():
            # requests is blocking, keep it off the event loop
            loop = asyncio.get_running_loop()
            return await loop.run_in_executor(None, self._send, request)

        try:
            response = await _submit_with_retry()
        except RetryError as e:
            logger.error(f"❌ {request.name or request.path} could not be sent: {e}")
            return SubmissionResult(error=str(e))

        result = SubmissionResult(status_code=response.status_code, text=response.text)
        if result.ok:
            logger.info(f"✅ {request.name or request.path} accepted ({response.status_code})")
        else:
            logger.error(
                f"❌ {request.name or request.path} failed: {response.status_code} {result.message() or response.text}"
            )
        return result
