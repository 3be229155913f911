from __future__ import annotations
from typing import Optional
import mediapipe as mp
import numpy as np
import cv2
from .landmarks import NUM_LANDMARKS

class FaceLandmarks:
    """MediaPipe Face Mesh with iris refinement; returns one (478, 2) normalized array or None."""
    def __init__(self, static_image_mode=False, min_detection_confidence=0.5, min_tracking_confidence=0.5):
        self.mesh = mp.solutions.face_mesh.FaceMesh(static_image_mode=static_image_mode,
                                                    refine_landmarks=True,
                                                    max_num_faces=1,
                                                    min_detection_confidence=min_detection_confidence,
                                                    min_tracking_confidence=min_tracking_confidence)

    def __call__(self, frame_bgr) -> Optional[np.ndarray]:
        rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)
        res = self.mesh.process(rgb)
        if not res.multi_face_landmarks: return None
        lms = res.multi_face_landmarks[0].landmark
        pts = np.array([(lm.x, lm.y) for lm in lms], dtype=np.float32)
        # refine_landmarks=False would give 468 points; the tracker needs the iris
        return pts if pts.shape[0] == NUM_LANDMARKS else None

    def close(self):
        self.mesh.close()
