import logging

from flask import request
from flask_socketio import emit, join_room, leave_room

from app.exceptions import ServiceError
from app.extensions.extensions import socketio
from app.services import auth_service

logger = logging.getLogger(__name__)

_registered = False


def _extract_access_token(auth):
    if isinstance(auth, dict):
        token = auth.get("token") or auth.get("access_token")
        if token:
            return token

    auth_header = request.headers.get("Authorization", "")
    if auth_header.startswith("Bearer "):
        return auth_header.split(" ", 1)[1].strip()

    return request.args.get("token")


def user_room(user_id) -> str:
    return f"user:{user_id}"


def register_socket_events():
    global _registered
    if _registered:
        return

    @socketio.on("connect")
    def handle_connect(auth=None):
        token = _extract_access_token(auth)
        if not token:
            # anonymous listeners still receive broadcasts
            logger.info("Listener connected: %s", request.sid)
            emit("connected", {"user": None})
            return None

        try:
            user = auth_service.authenticate_token(token)
        except ServiceError as e:
            logger.info("Rejected listener %s: %s", request.sid, e.message)
            return False

        join_room(user_room(user.id))
        logger.info("User %s connected: %s", user.username, request.sid)
        emit("connected", {"user": {"id": user.id, "username": user.username}})
        return None

    @socketio.on("joinRoom")
    def handle_join_room(room):
        if not isinstance(room, str) or not room.strip():
            emit("room_error", {"error": "Room name is required"})
            return

        join_room(room.strip())
        logger.info("Listener %s joined room: %s", request.sid, room.strip())
        emit("joinedRoom", {"room": room.strip()})

    @socketio.on("leaveRoom")
    def handle_leave_room(room):
        if not isinstance(room, str) or not room.strip():
            return

        leave_room(room.strip())
        emit("leftRoom", {"room": room.strip()})

    @socketio.on("disconnect")
    def handle_disconnect(*_args):
        logger.info("Listener disconnected: %s", request.sid)

    _registered = True
