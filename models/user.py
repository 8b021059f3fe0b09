from models.base_model import Base, BaseModel
from sqlalchemy import Column, String


class User(BaseModel, Base):
    __tablename__ = "users"
    username = Column(String(100), nullable=False, unique=True, index=True)
    email = Column(String(255), nullable=False)
    first_name = Column(String(255), nullable=True)
    last_name = Column(String(255), nullable=True)
    role = Column(String(50), nullable=False, default="user")
    password_hash = Column(String(255), nullable=False)

    @property
    def password(self):
        raise AttributeError("Password: Write-only field")
