from datetime import datetime

from werkzeug.security import check_password_hash, generate_password_hash

from app.db import db
from app.permissions import Role, capabilities_for


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(80), unique=True, nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(
        db.Enum(
            Role,
            name="user_role",
            values_callable=lambda roles: [role.value for role in roles],
        ),
        nullable=False,
        default=Role.USER,
    )
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    bio = db.Column(db.Text, nullable=True)
    profile_picture_id = db.Column(db.Integer, nullable=True)
    address = db.Column(db.String(255), nullable=True)
    phone = db.Column(db.String(50), nullable=True)
    website = db.Column(db.String(255), nullable=True)
    organization = db.Column(db.String(255), nullable=True)
    department = db.Column(db.String(255), nullable=True)

    twitter = db.Column(db.String(255), nullable=True)
    linkedin = db.Column(db.String(255), nullable=True)
    facebook = db.Column(db.String(255), nullable=True)
    instagram = db.Column(db.String(255), nullable=True)

    def set_password(self, password: str):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        return check_password_hash(self.password_hash, password)

    @property
    def capabilities(self):
        return capabilities_for(self.role)

    def __repr__(self) -> str:
        return f"<User {self.username}>"
