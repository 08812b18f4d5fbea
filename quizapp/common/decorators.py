from functools import wraps
from flask import jsonify, request


def json_fields_required(*fields, lists=()):
    """
    Decorator to reject JSON requests missing required fields.

    Args:
        fields: Names of text fields that must be present and non-empty
        lists: Names of fields that must be JSON arrays
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            data = request.get_json(silent=True)
            if not isinstance(data, dict):
                data = {}

            errors = []
            for field in fields:
                value = data.get(field)
                if value is None or (isinstance(value, str) and not value.strip()):
                    errors.append(f'{field.capitalize()} is required')
            for field in lists:
                if not isinstance(data.get(field), list):
                    errors.append(f'{field.capitalize()} array is required')

            if errors:
                return jsonify({'success': False, 'error': errors}), 400
            return f(*args, **kwargs)
        return decorated_function
    return decorator
