from sqlalchemy import Column, Integer, Text
from sqlalchemy.orm import relationship
from .base import Base


class Volunteer(Base):
    __tablename__ = 'voluntarios'
    volunteer_id = Column('idvol', Integer, primary_key=True, autoincrement=True)
    name = Column('nome', Text, nullable=False)
    email = Column('e-mail', Text, nullable=False, unique=True, index=True)

    notebooks = relationship("Notebook", back_populates="volunteer")
