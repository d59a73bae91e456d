"""API request schemas.

Request bodies are camelCase JSON; ``dump`` returns the camelCase document
form the stores and workflows work with.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def dump(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


# Account schemas
class SignUpRequest(CamelModel):
    first_name: str | None = None
    last_name: str | None = None
    school: str | None = None
    graduation_year: int | None = None
    major: str | None = None
    company: str | None = None
    position: str | None = None
    company_size: str | None = None
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)
    is_employer: bool = False
    is_admin: bool | None = None


# Application schemas
class ApplyRequest(CamelModel):
    user_id: str
    job_id: str
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    school: str | None = None
    graduation_date: str | None = None
    language_list: list[str] | str | None = None
    job_role: str | None = None
    work_authorization: str | None = None
    experience_level: str | None = None
    about_me: str | None = None
    comments: str | None = None


class ApplicationStatusUpdate(CamelModel):
    user_id: str
    job_id: str
    new_status: str = Field(min_length=1, description="Free-form label unless transitions are enforced")


# Job schemas
class PostJobRequest(CamelModel):
    employer_id: str
    job_name: str | None = None
    job_type: str | None = None
    location: str | None = None
    experience_level: str | None = None
    min_salary: int | float | None = None
    max_salary: int | float | None = None
    qualifications: str | list[str] | None = Field(default=None, description="Comma-separated")
    skills: str | list[str] | None = Field(default=None, description="Comma-separated")
    responsibilities: str | list[str] | None = Field(default=None, description="Comma-separated")
    employment_benefits: str | list[str] | None = Field(default=None, description="Comma-separated")
    tags: str | list[str] | None = None
    company_name: str | None = None
    company_description: str | None = None
    website: str | None = None
    company_email: str | None = None
    company_phone_number: str | None = None
    application_deadline: str | None = None
    work_schedule: str | None = None


# Generic collection schemas
class InsertRequest(BaseModel):
    document: dict | None = None
    documents: list[dict] | None = None


class UpdateRequest(BaseModel):
    update: dict | None = None
