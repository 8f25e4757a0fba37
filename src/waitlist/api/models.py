from pydantic import BaseModel, ConfigDict, StrictStr

class WaitlistSignupIn(BaseModel):
    """POST body. Unknown keys are ignored, a present email must be a string."""
    model_config = ConfigDict(extra="ignore")

    email: StrictStr = ""

class SuccessResponse(BaseModel):
    ok: bool = True

class ErrorResponse(BaseModel):
    error: str
