from rest_framework.views import exception_handler


def _first_message(detail):
    # DRF error details nest as dicts of lists; surface the first leaf
    if isinstance(detail, dict):
        for field, value in detail.items():
            message = _first_message(value)
            if field in ('non_field_errors', 'detail'):
                return message
            return f"{field}: {message}"
        return ''
    if isinstance(detail, list):
        return _first_message(detail[0]) if detail else ''
    return str(detail)


def error_exception_handler(exc, context):
    """
    Every API error body is {"error": "<message>"}.
    """
    response = exception_handler(exc, context)
    if response is not None:
        response.data = {'error': _first_message(response.data)}
    return response
