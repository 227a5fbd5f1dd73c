"""
Brand schemas - palettes and themes
"""

from typing import Dict, List

from pydantic import BaseModel, Field


class GradientListResponse(BaseModel):
    gradients: Dict[str, List[str]] = Field(description="Palette name -> hex colors")
    count: int


class ThemeListResponse(BaseModel):
    themes: Dict[str, Dict[str, str]] = Field(description="Theme name -> role colors")
    count: int
