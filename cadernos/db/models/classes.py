from sqlalchemy import Column, Integer, Text
from sqlalchemy.orm import relationship
from .base import Base


class Pep(Base):
    """Education program class; `directory` is the cloud folder with its scans."""
    __tablename__ = 'pep'
    class_id = Column('idpep', Integer, primary_key=True, autoincrement=True)
    name = Column('nome', Text, nullable=True)
    directory = Column('directory', Text, nullable=True)

    notebooks = relationship("Notebook", back_populates="pep")
