import asyncio
import logging
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Optional

from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build

from common.types.errors import remote_call_failed

logger = logging.getLogger(__name__)


class BaseGoogleService(ABC):
    """Base class for Google API services built from a ready set of credentials.

    The googleapiclient resource is blocking, so it is built and executed on a
    small thread pool and awaited from the event loop. Token refresh is left to
    google-auth inside the client.
    """

    def __init__(self, credentials: Optional[Credentials] = None, service: Any = None):
        if credentials is None and service is None:
            raise ValueError("Either credentials or a prebuilt service is required")
        self.credentials = credentials
        self._service = service
        self.executor = ThreadPoolExecutor(max_workers=1)
        logger.debug(f"Initialized {self.__class__.__name__}")

    @property
    @abstractmethod
    def service_name(self) -> str:
        """Google API service name (e.g., 'slides')"""
        pass

    @property
    @abstractmethod
    def service_version(self) -> str:
        """Google API service version (e.g., 'v1')"""
        pass

    async def _get_service(self) -> Any:
        """Get the Google API resource, building it on first use"""
        if self._service is not None:
            return self._service

        def _build_service() -> Any:
            return build(
                self.service_name,
                self.service_version,
                credentials=self.credentials,
                cache_discovery=False,
            )

        loop = asyncio.get_event_loop()
        self._service = await loop.run_in_executor(self.executor, _build_service)
        logger.debug(f"Successfully built {self.service_name} service")
        return self._service

    async def _execute_request(self, operation: str, request_func: Callable[[Any], Any]) -> Any:
        """
        Execute a Google API request

        Args:
            operation: Name used in logs and errors (e.g. "presentations.get")
            request_func: Function that takes a service and returns a request

        Raises:
            SlidesWriterError: REMOTE_CALL_FAILED for any error raised by the API client
        """
        service = await self._get_service()

        def _execute() -> Any:
            request = request_func(service)
            return request.execute()

        loop = asyncio.get_event_loop()
        try:
            result = await loop.run_in_executor(self.executor, _execute)
        except Exception as e:
            logger.error(f"Error executing {self.service_name} {operation}: {e}")
            raise remote_call_failed(operation, e) from e

        logger.debug(f"Successfully executed {self.service_name} {operation}")
        return result

    def close(self) -> None:
        """Release the worker thread; the service is unusable afterwards"""
        self.executor.shutdown(wait=False)

    async def __aenter__(self) -> "BaseGoogleService":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        self.close()

    def __del__(self) -> None:
        """Cleanup executor on deletion"""
        if hasattr(self, "executor"):
            self.executor.shutdown(wait=False)
