import math
from flask import request


def get_json_body():
    """Request body as a dict; a missing or malformed body is an empty dict"""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def require_fields(data, *fields):
    missing = [f for f in fields if data.get(f) in (None, '')]
    if missing:
        raise ValueError(f"Missing required parameter: {', '.join(missing)}")


def parse_number(data, field, required=True):
    value = data.get(field)
    if value is None or value == '':
        if required:
            raise ValueError(f"Missing required parameter: {field}")
        return None
    if isinstance(value, bool):
        raise ValueError(f"{field} must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{field} must be a number")
    if not math.isfinite(number):
        raise ValueError(f"{field} must be a finite number")
    return number


def parse_string(data, field, required=False):
    """Optional text field; anything but a string is rejected"""
    value = data.get(field)
    if value is None or value == '':
        if required:
            raise ValueError(f"Missing required parameter: {field}")
        return None
    if not isinstance(value, str):
        raise ValueError(f"{field} must be a string")
    return value


def parse_id(data, field):
    number = parse_number(data, field)
    if not number.is_integer():
        raise ValueError(f"{field} must be an integer")
    return int(number)
