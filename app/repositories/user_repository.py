from sqlalchemy import or_

from app.models.user_model import User
from app.db import db


def get_by_id(user_id: int):
    return db.session.get(User, user_id)


def get_by_username(username: str):
    return User.query.filter_by(username=username).first()


def get_by_email(email: str):
    return User.query.filter_by(email=email).first()


def get_by_username_or_email(value: str):
    return User.query.filter(
        or_(User.username == value, User.email == value)
    ).first()


def exists_with_username_or_email(username: str, email: str) -> bool:
    return (
        User.query.filter(
            or_(User.username == username, User.email == email)
        ).first()
        is not None
    )


def get_by_ids(user_ids):
    if not user_ids:
        return []
    return User.query.filter(User.id.in_(user_ids)).all()


def list_users():
    return User.query.order_by(User.created_at.asc(), User.id.asc()).all()


def create_user(username, email, password, role):
    user = User(
        username=username,
        email=email,
        role=role,
    )
    user.set_password(password)
    db.session.add(user)
    db.session.commit()
    return user
