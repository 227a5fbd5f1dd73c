"""
Overlay schemas - responses of the overlay endpoints
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class OverlayKindResponse(BaseModel):
    """One overlay kind with its presets and parameter keys"""
    kind: str = Field(description="Overlay kind identifier")
    presets: List[str] = Field(default_factory=list, description="Named presets (text and cta only)")
    params: List[str] = Field(description="Every parameter key the overlay reads")


class OverlayKindListResponse(BaseModel):
    kinds: List[OverlayKindResponse]
    count: int


class OverlayConfigResponse(BaseModel):
    """Fully-defaulted parameter set after resolution"""
    kind: str
    config: Dict[str, Any] = Field(description="Resolved parameters, one value per key")


class OverlayFrameResponse(BaseModel):
    """Declarative frame of an overlay `t` seconds after mount"""
    kind: str
    t: float = Field(ge=0, description="Seconds since mount")
    seed: Optional[int] = Field(None, description="Seed of the instance random source")
    frame: Dict[str, Any] = Field(description="Property dict consumed by the rendering surface")


class SessionResponse(BaseModel):
    """Live overlay session sampled on the server loop"""
    id: str = Field(description="Session identifier")
    kind: str
    fps: int = Field(description="Sampling rate")
    frames_sampled: int = 0
    sample_errors: int = 0


class SessionListResponse(BaseModel):
    sessions: List[SessionResponse]
    count: int


class SessionFrameResponse(BaseModel):
    """Latest frame of a live session"""
    id: str
    kind: str
    frame: Dict[str, Any]
