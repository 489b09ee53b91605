"""HTTP health check run once per service in a batch."""

from __future__ import annotations

from typing import TYPE_CHECKING

import requests

from src.core.errors import NetworkError, RemoteServiceError
from src.utils.logger import get_logger
from src.utils.validators import is_valid_url

if TYPE_CHECKING:
    from src.core.context import BatchContext

logger = get_logger(__name__)


class HttpHealthCheckProcessor:
    """Checks a service by GETting its health endpoint.

    endpoint_template is formatted with service=<item key>, for example
    "https://{service}.internal.example.com/health". Any 2xx response is
    healthy.
    """

    def __init__(
        self,
        endpoint_template: str,
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        if "{service}" not in endpoint_template:
            msg = "endpoint_template must contain a {service} placeholder"
            raise ValueError(msg)
        self.endpoint_template = endpoint_template
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()

    def endpoint_for(self, service: str) -> str:
        return self.endpoint_template.format(service=service)

    def process(self, ctx: BatchContext, item_key: str) -> None:
        url = self.endpoint_for(item_key)
        if not is_valid_url(url):
            msg = f"invalid health check URL for {item_key}: {url}"
            raise RemoteServiceError(msg)

        timeout = self.timeout
        remaining = ctx.remaining()
        if remaining is not None:
            timeout = min(timeout, remaining)
        # Deadline may have passed between scheduling and now.
        ctx.raise_if_cancelled()

        logger.debug("health_check_started", service=item_key, url=url)
        try:
            response = self.session.get(url, timeout=timeout)
        except requests.RequestException as exc:
            msg = f"health check request failed for {item_key}"
            raise NetworkError(msg, exc) from exc

        if not 200 <= response.status_code < 300:
            msg = f"{item_key} reported HTTP {response.status_code}"
            raise RemoteServiceError(msg)
        logger.debug("health_check_passed", service=item_key, status_code=response.status_code)
