"""Domain errors raised by the notebook service.

Each error carries the stable `name` code clients match on plus a readable
message.
"""


class NotebookServiceError(Exception):
    name = "NOTEBOOK_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_detail(self) -> dict:
        return {"name": self.name, "message": self.message}


class VolunteerNotFoundError(NotebookServiceError):
    name = "VOLUNTEER_NOT_FOUND"

    def __init__(self, volunteer_id: int):
        super().__init__(f"Volunteer with id {volunteer_id} not found")
        self.volunteer_id = volunteer_id


class NotebookNotFoundError(NotebookServiceError):
    name = "NOTEBOOK_NOT_FOUND"

    def __init__(self, notebook_id: int):
        super().__init__(f"Notebook with id {notebook_id} not found")
        self.notebook_id = notebook_id


class NotebookAlreadyReservedError(NotebookServiceError):
    name = "NOTEBOOK_ALREADY_RESERVED_ERROR"

    def __init__(self, notebook_id: int):
        super().__init__("Notebook already reserved or already evaluated")
        self.notebook_id = notebook_id


class NotebookAlreadyEvaluatedError(NotebookServiceError):
    name = "NOTEBOOK_ALREADY_EVALUATED_ERROR"

    def __init__(self, notebook_id: int):
        super().__init__(f"Notebook with id {notebook_id} already evaluated")
        self.notebook_id = notebook_id


class NotebookNotReservedByVolunteerError(NotebookServiceError):
    name = "NOTEBOOK_NOT_RESERVED_BY_VOLUNTEER"

    def __init__(self, notebook_id: int, volunteer_id: int):
        super().__init__(f"Notebook with id {notebook_id} is not reserved by volunteer {volunteer_id}")
        self.notebook_id = notebook_id
        self.volunteer_id = volunteer_id
