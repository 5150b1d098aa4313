from atelier.extensions import db, bcrypt
from .base import BaseModel

USER_ROLES = ("admin", "editor")


class User(BaseModel):
    __tablename__ = "users"

    username = db.Column(db.String(100), unique=True, nullable=False)
    password = db.Column(db.String(255), nullable=False)
    role = db.Column(
        db.Enum(*USER_ROLES, name="user_role", validate_strings=True),
        nullable=False,
        default="editor",
    )

    def set_password(self, password):
        self.password = bcrypt.generate_password_hash(password).decode("utf-8")

    def check_password(self, password):
        return bcrypt.check_password_hash(self.password, password)
