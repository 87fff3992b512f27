from pydantic import BaseModel, ConfigDict


class VolunteerBase(BaseModel):
    name: str
    email: str


class Volunteer(VolunteerBase):
    volunteer_id: int
    model_config = ConfigDict(from_attributes=True)
