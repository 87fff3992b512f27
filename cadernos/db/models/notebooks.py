"""
Notebooks keep the column headers of the original grading spreadsheet; the
attribute names below are the only place that renaming happens.

Lifecycle columns:
- idvol / datareserva: set together, exactly once, by a successful claim
- "Carimbo de data/hora": evaluation timestamp; non-null is terminal
"""

from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from .base import Base
from cadernos.db.types import YesNoFlag


class Notebook(Base):
    __tablename__ = 'cadernos'
    notebook_id = Column('idcad', Integer, primary_key=True, autoincrement=True)
    reserved_by = Column('idvol', Integer, ForeignKey('voluntarios.idvol'), nullable=True)
    class_id = Column('idpep', Integer, ForeignKey('pep.idpep'), nullable=True)

    student_name = Column('nome do(a) aluno(a)', Text, nullable=True)
    student_registration = Column('número de matrícula do(a) aluno(a)', Text, nullable=True)
    student_prison_unit = Column('unidade prisional do(a) aluno(a)', Text, nullable=True)

    subject1 = Column('tema 1', Text, nullable=True)
    subject2 = Column('tema 2', Text, nullable=True)
    subject3 = Column('tema 3', Text, nullable=True)
    subject4 = Column('tema 4', Text, nullable=True)
    subject5 = Column('tema 5', Text, nullable=True)
    subject6 = Column('tema 6', Text, nullable=True)
    subject7 = Column('tema 7', Text, nullable=True)
    subject8 = Column('tema 8', Text, nullable=True)
    subject9 = Column('tema 9', Text, nullable=True)
    subject10 = Column('tema 10', Text, nullable=True)
    relevant_content = Column('conteúdos relevantes', Text, nullable=True)

    a1 = Column('a1', Text, nullable=True)
    a2 = Column('a2', Text, nullable=True)
    a3 = Column('a3', Text, nullable=True)
    a4 = Column('a4', Text, nullable=True)
    a5 = Column('a5', Text, nullable=True)
    a6 = Column('a6', Text, nullable=True)
    a7 = Column('a7', Text, nullable=True)
    a8 = Column('a8', Text, nullable=True)
    a9 = Column('a9', Text, nullable=True)
    a10 = Column('a10', Text, nullable=True)
    a11 = Column('a11', Text, nullable=True)
    a12 = Column('a12', Text, nullable=True)
    a13 = Column('a13', Text, nullable=True)

    conclusion = Column('conclusão do avaliador', Text, nullable=True)
    archives_exclusion = Column('exclusão de arquivos recebidos', YesNoFlag(), nullable=True)
    evaluated_at = Column('Carimbo de data/hora', DateTime(timezone=True), nullable=True)
    reserved_at = Column('datareserva', DateTime(timezone=True), nullable=True)

    volunteer = relationship("Volunteer", back_populates="notebooks")
    pep = relationship("Pep", back_populates="notebooks")

    __table_args__ = (
        Index('idx_cadernos_idvol', 'idvol'),
        Index('idx_cadernos_availability', 'datareserva', 'Carimbo de data/hora'),
    )

    @property
    def evaluator_name(self) -> str:
        return self.volunteer.name if self.volunteer is not None else ''

    @property
    def evaluator_email(self):
        return self.volunteer.email if self.volunteer is not None else None

    @property
    def notebook_directory(self):
        return self.pep.directory if self.pep is not None else None
