# utils/roles.py
"""
Dashboard role helper
Resolves the role that decides which affordances a page renders:
1. Production: the role claim of the gateway's bearer token
2. Gateway header: x-user-role forwarded by the proxy
3. Development: the DASHBOARD_ROLE setting
"""
from functools import wraps

import jwt
from flask import abort, current_app, request

ROLES = ('admin', 'teacher', 'student', 'parent')


def decode_gateway_token():
    """
    Decode the JWT from the Authorization header.

    Returns the payload, or None when the header is missing or the token
    does not verify.
    """
    auth_header = request.headers.get('Authorization')
    if not auth_header or not auth_header.startswith('Bearer '):
        return None

    token = auth_header.split(' ', 1)[1]
    try:
        return jwt.decode(
            token,
            current_app.config['JWT_SECRET_KEY'],
            algorithms=['HS256']
        )
    except jwt.InvalidTokenError as e:
        current_app.logger.debug(f"Ignoring gateway token: {e}")
        return None


def get_current_role():
    """Role of the current request. Unknown role values are ignored."""
    payload = decode_gateway_token()
    if payload and payload.get('role') in ROLES:
        return payload['role']

    role = request.headers.get('x-user-role')
    if role in ROLES:
        return role

    return current_app.config.get('DASHBOARD_ROLE', 'admin')


def is_admin():
    return get_current_role() == 'admin'


def require_role(*allowed_roles):
    """
    Decorator to require specific role(s).

    Usage:
    @classes_bp.route('/list/classes', methods=['POST'])
    @require_role('admin')
    def create_class():
        ...
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            role = get_current_role()
            if role not in allowed_roles:
                current_app.logger.warning(
                    f"Role {role} refused for {request.endpoint}. Required: {allowed_roles}"
                )
                abort(403, description=f'Role {role} is not allowed to change records.')
            return f(*args, **kwargs)
        return decorated_function
    return decorator
