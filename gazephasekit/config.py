from __future__ import annotations
from pathlib import Path
from pydantic import BaseModel, Field, model_validator
import yaml

class BlinkConfig(BaseModel):
    threshold: float = 0.21
    min_frames: int = Field(2, ge=1)

class HistoryConfig(BaseModel):
    ear: int = Field(100, ge=1)
    gaze: int = Field(5, ge=1)
    pupil: int = Field(30, ge=1)

class PhaseConfig(BaseModel):
    left_threshold: float = 0.65
    right_threshold: float = 0.35
    required_frames: int = Field(10, ge=1)
    decay: int = Field(2, ge=0)

    @model_validator(mode="after")
    def _straddle(self):
        if not self.right_threshold < 0.5 < self.left_threshold:
            raise ValueError("right_threshold < 0.5 < left_threshold required")
        return self

class ChoreographyConfig(BaseModel):
    """Seconds, relative to session start (intro) or to the moment a phase is entered."""
    app_visible_s: float = 0.3
    dashboard_s: float = 1.0
    pointer_s: float = 1.5
    intro_banner_s: float = 6.0
    intro_hide_s: float = 9.0
    first_instruction_s: float = 9.5
    first_instruction_hide_s: float = 13.5
    flash_s: float = 0.2
    action_text_s: float = 2.0
    look_right_hide_s: float = 5.0
    circle_hide_s: float = 6.0
    trail_enable_s: float = 6.0
    circle_finish_s: float = 16.0
    final_header_s: float = 0.8
    final_body_s: float = 3.5
    final_cta_s: float = 10.0

class ScreenConfig(BaseModel):
    width: int = Field(1280, gt=0)
    height: int = Field(720, gt=0)

class TrackerConfig(BaseModel):
    blink: BlinkConfig = Field(default_factory=BlinkConfig)
    history: HistoryConfig = Field(default_factory=HistoryConfig)
    phases: PhaseConfig = Field(default_factory=PhaseConfig)
    choreography: ChoreographyConfig = Field(default_factory=ChoreographyConfig)
    screen: ScreenConfig = Field(default_factory=ScreenConfig)

def load_config(path: str|Path|None) -> TrackerConfig:
    if path is None:
        return TrackerConfig()
    with open(path, "r") as f: cfg = yaml.safe_load(f)
    return TrackerConfig.model_validate(cfg or {})
