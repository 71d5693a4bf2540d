"""HTTP request/response models for the UI layer."""
from pydantic import BaseModel, Field

from reelspin.config import settings
from reelspin.logic.models import FrameSnapshot


# === Request Models ===


class SetBetRequest(BaseModel):
    """PUT /bet request body."""

    amount: int = Field(..., description="Must be one of availableAmounts")


class GeometryRequest(BaseModel):
    """PUT /geometry/columns and /geometry/rows request body."""

    value: int = Field(..., description="Must be in the dimension's option set")


# === Response Models ===


class Configuration(BaseModel):
    """Configuration object in /init response."""

    availableAmounts: list[int]
    columnOptions: list[int]
    rowOptions: list[int]
    symbols: list[str]
    spinDurationSeconds: float
    spinSpeed: float
    frameRate: int
    configHash: str


class InitResponse(BaseModel):
    """GET /init response."""

    protocolVersion: str = settings.protocol_version
    configuration: Configuration
    frame: FrameSnapshot


class SpinResponse(BaseModel):
    """POST /spin response.

    accepted is False when a spin was already running; nothing was charged.
    """

    protocolVersion: str = settings.protocol_version
    accepted: bool
    betAmountCharged: int = 0
    balance: int
    frame: FrameSnapshot


class BetResponse(BaseModel):
    """Response to the bet triggers."""

    protocolVersion: str = settings.protocol_version
    bet: int
    betIndex: int


class GeometryResponse(BaseModel):
    """Response to the geometry triggers."""

    protocolVersion: str = settings.protocol_version
    columns: int
    rows: int
