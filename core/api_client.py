"""HTTP client for the jobs API used by the board and the intake form."""
import logging

import requests
from django.conf import settings

logger = logging.getLogger(__name__)


class JobsApiError(Exception):
    """
    Any failed call to the jobs API.
    `message` is the server's `error` string when it sent one, `status` the
    HTTP status (None for transport and decoding failures).
    """

    def __init__(self, message=None, status=None):
        super().__init__(message or f"Jobs API request failed (status={status})")
        self.message = message
        self.status = status


class JobsApiClient:
    def __init__(self, base_url=None, timeout=None, session=None):
        self.base_url = base_url or settings.JOBS_API_URL
        self.timeout = timeout if timeout is not None else settings.JOBS_API_TIMEOUT
        self.session = session or requests.Session()

    def list_jobs(self, params=None):
        """GET /api with the given query parameters; returns the raw records."""
        try:
            r = self.session.get(self.base_url, params=params or {}, timeout=self.timeout)
        except requests.RequestException as exc:
            raise JobsApiError(status=None) from exc

        if not r.ok:
            raise JobsApiError(_error_message(r), r.status_code)

        try:
            data = r.json()
        except ValueError as exc:
            raise JobsApiError(status=r.status_code) from exc

        if not isinstance(data, list):
            raise JobsApiError(status=r.status_code)
        logger.debug("Jobs API params=%r returned %d jobs", params, len(data))
        return data

    def create_job(self, payload):
        """POST /api with the full job record as JSON."""
        try:
            r = self.session.post(self.base_url, json=payload, timeout=self.timeout)
        except requests.RequestException as exc:
            raise JobsApiError(status=None) from exc

        if not r.ok:
            raise JobsApiError(_error_message(r), r.status_code)

        try:
            return r.json()
        except ValueError as exc:
            raise JobsApiError(status=r.status_code) from exc


def _error_message(response):
    try:
        data = response.json()
    except ValueError:
        return None
    if isinstance(data, dict) and data.get('error'):
        return str(data['error'])
    return None
