"""
Pydantic models for job-application records.

Records travel as camelCase JSON (userId, fullName, ...) and are handled as
snake_case attributes in Python. Only id and userId are typed, since they
are used as lookup keys; every other field is passed through as the
frontend sent it, including nulls and fields not declared here.
"""
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApplicationRecord(BaseModel):
    """A stored job-application submission keyed by a caller-supplied id"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        coerce_numbers_to_str=True,
    )

    id: Optional[str] = Field(None, description="Caller-supplied unique application ID")
    user_id: Optional[str] = Field(None, description="Discord user ID of the applicant")
    full_name: Optional[Any] = None
    position: Optional[Any] = None
    email: Optional[Any] = None
    license_number: Optional[Any] = None
    experience: Optional[Any] = Field(None, description="Flight hours")
    motivation: Optional[Any] = None
    experience_detail: Optional[Any] = None
    user_avatar: Optional[Any] = None
    webhook_url: Optional[str] = Field(None, description="Discord webhook notified on submission")

    # Review fields, only written by a status update
    status: Optional[Any] = None
    reviewed_at: Optional[str] = None
    reviewed_by: Optional[Any] = None

    def to_dict(self) -> dict:
        """JSON form as returned to the frontend (fields never sent are omitted)"""
        return self.model_dump(by_alias=True, exclude_unset=True)


class StatusUpdate(BaseModel):
    """Review decision applied by PATCH /api/applications/{id}"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    status: Optional[Any] = None
    reviewed_by: Optional[Any] = None
