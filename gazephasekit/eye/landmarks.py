from __future__ import annotations
from dataclasses import dataclass
from enum import IntEnum
from typing import Tuple
import numpy as np

# Refined FaceMesh topology: 468 face points + 10 iris points.
NUM_LANDMARKS = 478

class LandmarkContractError(ValueError):
    """Landmark input does not match the face-mesh contract (shape, count, frame size)."""

class EyeSlot(IntEnum):
    # p1..p6 of the classic EAR formulation; A/B pairs are vertically opposed
    CORNER_A = 0
    UPPER_A = 1
    UPPER_B = 2
    CORNER_B = 3
    LOWER_B = 4
    LOWER_A = 5

class IrisSlot(IntEnum):
    # compass points of the iris ellipse; SIDE_A/SIDE_B and TOP/BOTTOM are opposed
    SIDE_A = 0
    TOP = 1
    SIDE_B = 2
    BOTTOM = 3

@dataclass(frozen=True)
class EyeIndex:
    name: str
    contour: Tuple[int, int, int, int, int, int]
    iris: Tuple[int, int, int, int]

LEFT_EYE = EyeIndex("left", contour=(33, 160, 158, 133, 153, 144), iris=(469, 470, 471, 472))
RIGHT_EYE = EyeIndex("right", contour=(362, 385, 387, 263, 373, 380), iris=(474, 475, 476, 477))

def as_frame(landmarks) -> np.ndarray:
    """
    Validate a landmark snapshot and return it as a float (478, 2) array.
    A trailing z column (MediaPipe) is dropped.
    """
    pts = np.asarray(landmarks, dtype=np.float64)
    if pts.ndim != 2 or pts.shape[0] != NUM_LANDMARKS or pts.shape[1] not in (2, 3):
        raise LandmarkContractError(
            f"expected ({NUM_LANDMARKS}, 2|3) landmarks, got shape {pts.shape}")
    return pts[:, :2]

def check_frame_size(width: int, height: int):
    if width <= 0 or height <= 0:
        raise LandmarkContractError(f"frame size must be positive, got {width}x{height}")

def require_points(points, n: int, what: str) -> np.ndarray:
    pts = np.asarray(points, dtype=np.float64)
    if pts.ndim != 2 or pts.shape[0] != n or pts.shape[1] < 2:
        raise LandmarkContractError(f"{what} needs {n} points, got shape {pts.shape}")
    return pts[:, :2]

def eye_points(frame: np.ndarray, eye: EyeIndex) -> np.ndarray:
    return frame[list(eye.contour)]

def iris_points(frame: np.ndarray, eye: EyeIndex) -> np.ndarray:
    return frame[list(eye.iris)]
