import logging
import traceback

from django.utils.deprecation import MiddlewareMixin

from .domain_logs import UserActivityLog, ErrorLog

logger = logging.getLogger(__name__)

AUDITED_METHODS = ('POST', 'PUT', 'PATCH', 'DELETE')


def _request_user(request):
    user = getattr(request, 'user', None)
    if user is not None and user.is_authenticated:
        return user
    return None


class RequestActivityMiddleware(MiddlewareMixin):
    """Writes a UserActivityLog row for mutating /api/ requests."""

    def process_response(self, request, response):
        if request.method not in AUDITED_METHODS or not request.path.startswith('/api/'):
            return response
        match = getattr(request, 'resolver_match', None)
        try:
            UserActivityLog.objects.create(
                user=_request_user(request),
                view_name=(match.view_name if match else '') or '',
                path=request.path[:1000],
                method=request.method,
                status_code=getattr(response, 'status_code', None),
            )
        except Exception:
            # an audit failure must not replace the real response
            logger.exception("Could not write activity log for %s %s", request.method, request.path)
        return response


class ExceptionLoggingMiddleware(MiddlewareMixin):
    def process_exception(self, request, exception):
        logger.error("Unhandled error on %s %s: %s", request.method, request.path, exception)
        try:
            ErrorLog.objects.create(
                user=_request_user(request),
                path=request.path[:1000],
                method=request.method,
                message=str(exception),
                stack=traceback.format_exc(),
            )
        except Exception:
            logger.exception("Could not write error log")
        # returning None allows normal exception handling to continue
        return None
