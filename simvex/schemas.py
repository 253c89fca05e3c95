from pydantic import BaseModel, ConfigDict
from typing import Optional

class AskRequest(BaseModel):
    # Both fields are passed through as-is; the front-end sometimes omits them
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    question: Optional[str] = None
    currentPart: Optional[str] = None

class AskResponse(BaseModel):
    answer: str

class HealthResponse(BaseModel):
    status: str
