"""
Custom middleware for request timing and logging.
Logs every API request with its response time and exposes the duration in
the ``X-Response-Time-Ms`` header.
"""

import logging
import time

logger = logging.getLogger('request_timing')

RESPONSE_TIME_HEADER = 'X-Response-Time-Ms'


class RequestTimingMiddleware:
    """
    Middleware to measure and log request processing time.

    Logs format:
    "POST /api/v1/tasks/assign/Project-00001 HTTP/1.1" 200 412 [18ms]
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        start_time = time.time()

        response = self.get_response(request)

        duration_ms = (time.time() - start_time) * 1000

        # Streaming responses have no ``content``
        content_length = len(response.content) if hasattr(response, 'content') else 0

        response[RESPONSE_TIME_HEADER] = f'{duration_ms:.0f}'

        log = logger.warning if response.status_code >= 500 else logger.info
        log(
            f'"{request.method} {request.get_full_path()} '
            f'{request.META.get("SERVER_PROTOCOL", "HTTP/1.1")}" '
            f'{response.status_code} {content_length} '
            f'[{duration_ms:.0f}ms]'
        )

        return response
