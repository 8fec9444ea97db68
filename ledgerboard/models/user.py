from sqlalchemy import Column, Integer, String

from ledgerboard.database.base import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    username = Column(String, nullable=False, unique=True)
    password_hash = Column(String, nullable=False)
    name = Column(String, nullable=False)
    business_name = Column(String)

    @property
    def first_name(self):
        return (self.name or "").split(" ")[0]


__all__ = ["User"]
