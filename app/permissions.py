import enum
from functools import wraps

from flask import jsonify
from flask_jwt_extended import get_current_user

from app.exceptions import AccessDeniedError, UnauthenticatedError


class Role(str, enum.Enum):
    USER = "user"
    ADMIN = "admin"


class Capability(str, enum.Enum):
    READ = "read"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


ROLE_CAPABILITIES = {
    Role.USER: frozenset(
        {Capability.READ, Capability.CREATE, Capability.UPDATE, Capability.DELETE}
    ),
    Role.ADMIN: frozenset(
        {Capability.READ, Capability.CREATE, Capability.UPDATE, Capability.DELETE}
    ),
}


def parse_role(value):
    """Return the ``Role`` for ``value`` or None when it names no role."""
    if isinstance(value, Role):
        return value
    try:
        return Role(value)
    except ValueError:
        return None


def capabilities_for(role) -> frozenset:
    resolved = parse_role(role)
    if resolved is None:
        return frozenset()
    return ROLE_CAPABILITIES.get(resolved, frozenset())


def is_admin(user) -> bool:
    return user is not None and parse_role(user.role) is Role.ADMIN


def require_capability(user, capability: Capability):
    if user is None:
        raise UnauthenticatedError()

    if Capability(capability) not in capabilities_for(user.role):
        raise AccessDeniedError()


def _current_user_or_none():
    # get_current_user raises outside a verified JWT context
    try:
        return get_current_user()
    except RuntimeError:
        return None


def capability_required(capability: Capability):
    def decorator(view_func):
        @wraps(view_func)
        def wrapped(*args, **kwargs):
            try:
                require_capability(_current_user_or_none(), capability)
            except (UnauthenticatedError, AccessDeniedError) as e:
                return jsonify({"error": e.message}), e.status_code
            return view_func(*args, **kwargs)

        return wrapped
    return decorator


def role_required(*roles: Role):
    allowed = {Role(role) for role in roles}

    def decorator(view_func):
        @wraps(view_func)
        def wrapped(*args, **kwargs):
            user = _current_user_or_none()
            if user is None:
                return jsonify({"error": UnauthenticatedError.default_message}), 401

            if parse_role(user.role) not in allowed:
                return jsonify({"error": "Forbidden: Admins only"}), 403
            return view_func(*args, **kwargs)

        return wrapped
    return decorator
