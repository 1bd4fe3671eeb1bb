import contextvars
import logging
import uuid

HEADER = "X-Operation-Id"

operation_id = contextvars.ContextVar("operation_id", default="-")


class OperationIdMiddleware:
    """
    Tags every request with an operation id (taken from the X-Operation-Id
    header when the caller sends one) so all log lines of one request can be
    grouped; the id is echoed back in the response header.
    """
    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        op_id = request.headers.get(HEADER) or str(uuid.uuid4())
        token = operation_id.set(op_id)
        request.operation_id = op_id
        try:
            response = self.get_response(request)
        finally:
            operation_id.reset(token)
        response[HEADER] = op_id
        return response


class OperationIdFilter(logging.Filter):
    def filter(self, record):
        record.operation_id = operation_id.get()
        return True
