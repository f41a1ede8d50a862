from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BarInfo(BaseModel):
    """
    Current simulated bar. Replaced as a whole, never field by field.
    """

    model_config = ConfigDict(frozen=True)

    datetime: str = Field(default="", description="Bar Timestamp")
    resolution: str = Field(default="", description="Bar Resolution (e.g. 1m, 1d)")


class RequestHeader(BaseModel):
    """
    Simulation context attached to every bridged call.
    """

    model_config = ConfigDict(frozen=True)

    start: str = Field(..., description="Backtest Range Start")
    end: str = Field(..., description="Backtest Range End")
    datetime: str = Field(default="", description="Current Bar Timestamp")
    resolution: str = Field(default="", description="Current Bar Resolution")


class CallEnvelope(BaseModel):
    """
    Request sent to the backtest engine.
    """

    method: str = Field(..., description="HTTP Verb")
    url: str = Field(..., description="Path of the API call (no scheme/host)")
    data: Dict[str, Any] = Field(default_factory=dict, description="Decoded Body")
    headers: RequestHeader


class ErrorRecord(BaseModel):
    id: str
    message: str


class ReplyEnvelope(BaseModel):
    """
    Reply received from the backtest engine.
    """

    status: int = Field(..., description="HTTP-like Status Code")
    errors: List[ErrorRecord] = Field(..., description="Empty list means success")
    data: Any = Field(..., description="Opaque Payload (may be null)")
    events: Dict[str, Any] = Field(default_factory=dict, description="Runtime Events")

    @field_validator("events", mode="before")
    @classmethod
    def null_events_are_empty(cls, v):
        return {} if v is None else v


class BacktestResponse(BaseModel):
    """
    Body surfaced to the caller. Runtime events are read separately.
    """

    errors: List[ErrorRecord]
    data: Any
