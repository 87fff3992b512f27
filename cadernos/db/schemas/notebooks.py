from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict


class NotebookContent(BaseModel):
    """Subject and answer fields shared by stored notebooks and evaluations."""
    student_prison_unit: Optional[str] = None
    subject1: Optional[str] = None
    subject2: Optional[str] = None
    subject3: Optional[str] = None
    subject4: Optional[str] = None
    subject5: Optional[str] = None
    subject6: Optional[str] = None
    subject7: Optional[str] = None
    subject8: Optional[str] = None
    subject9: Optional[str] = None
    subject10: Optional[str] = None
    relevant_content: Optional[str] = None
    a1: Optional[str] = None
    a2: Optional[str] = None
    a3: Optional[str] = None
    a4: Optional[str] = None
    a5: Optional[str] = None
    a6: Optional[str] = None
    a7: Optional[str] = None
    a8: Optional[str] = None
    a9: Optional[str] = None
    a10: Optional[str] = None
    a11: Optional[str] = None
    a12: Optional[str] = None
    a13: Optional[str] = None


class EvaluateNotebook(NotebookContent):
    """Evaluation payload; `volunteer_id` is the evaluator and must hold the reservation."""
    volunteer_id: int
    conclusion: str
    archives_exclusion: bool = False


class ReserveNotebook(BaseModel):
    volunteer_id: int
    notebook_id: int


class Notebook(NotebookContent):
    notebook_id: int
    reserved_by: Optional[int] = None
    class_id: Optional[int] = None
    student_name: Optional[str] = None
    student_registration: Optional[str] = None
    evaluator_name: str = ''
    evaluator_email: Optional[str] = None
    conclusion: Optional[str] = None
    archives_exclusion: Optional[bool] = None
    evaluated_at: Optional[datetime] = None
    reserved_at: Optional[datetime] = None
    notebook_directory: Optional[str] = None
    model_config = ConfigDict(from_attributes=True)


class AvailableNotebookRow(BaseModel):
    """Row shown in a volunteer's table of notebooks they may grade."""
    notebook_id: int
    reserved_by: Optional[int] = None
    class_id: Optional[int] = None
    student_name: Optional[str] = None
    student_registration: Optional[str] = None
    student_prison_unit: Optional[str] = None
    notebook_directory: Optional[str] = None
    reserved_at: Optional[datetime] = None
    evaluated_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


class EvaluatedCount(BaseModel):
    count: int
