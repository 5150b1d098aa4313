from functools import wraps

from flask import request

from atelier.errors import ValidationError
from atelier.schemas import Err, parse


def _request_payload():
    if request.mimetype == "multipart/form-data":
        return request.form.to_dict()
    return request.get_json(silent=True) or {}


def validate_body(schema):
    """
    Parse the JSON body (or the text fields of a multipart form) with
    ``schema`` and pass the result to the view as ``body``.
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            result = parse(schema, _request_payload())
            if isinstance(result, Err):
                raise ValidationError(result.errors)
            return fn(*args, body=result.value, **kwargs)
        return wrapper
    return decorator


def validate_query(schema):
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            result = parse(schema, request.args.to_dict())
            if isinstance(result, Err):
                raise ValidationError(result.errors)
            return fn(*args, query=result.value, **kwargs)
        return wrapper
    return decorator
