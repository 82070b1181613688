"""User model for the people operating the check-in desk."""

from sqlmodel import Field, SQLModel


class User(SQLModel, table=True):
    """A platform user; the actor recorded against check-ins.

    Attributes:
        id: Numeric primary key.
        name: Display name.
        email: Login email address.
    """
    __tablename__ = "app_user"

    id: int | None = Field(default=None, primary_key=True)
    name: str
    email: str = Field(index=True, unique=True)
