from sqlalchemy import Column, Integer, String
from app.core.db import Base


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    name = Column(String(150), nullable=False, unique=True, index=True)
    description = Column(String(300), nullable=True)

    def __repr__(self):
        return f"<Category id={self.id} name={self.name}>"
