from typing import Optional

from pydantic import BaseModel, Field, field_validator


class ChatRequest(BaseModel):
    message: str = Field("", description="The user's question")

    @field_validator("message", mode="before")
    @classmethod
    def _null_as_empty(cls, value):
        return "" if value is None else value


class ChatResponse(BaseModel):
    reply: str = Field(description="The assistant's answer, possibly empty")


class ErrorResponse(BaseModel):
    error: str


class MachineListRequest(BaseModel):
    vehicle_type: str = Field(description="Free-text vehicle type, e.g. 'digger'")
    manufacturer: Optional[str] = Field(None, description="Exact manufacturer name")
    model_keyword: Optional[str] = Field(None, description="Case-insensitive model name fragment")
