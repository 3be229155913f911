from __future__ import annotations
import cv2, logging, time
from typing import Iterator, Dict, Any

log = logging.getLogger(__name__)

def frames(camera: int|str=0, width: int=1280, height: int=720, mirror: bool=False) -> Iterator[Dict[str,Any]]:
    cap = cv2.VideoCapture(camera)
    if width:  cap.set(cv2.CAP_PROP_FRAME_WIDTH, width)
    if height: cap.set(cv2.CAP_PROP_FRAME_HEIGHT, height)
    if not cap.isOpened():
        raise RuntimeError(f"Cannot open camera {camera!r}")
    log.info("camera %r opened at %dx%d", camera,
             int(cap.get(cv2.CAP_PROP_FRAME_WIDTH)), int(cap.get(cv2.CAP_PROP_FRAME_HEIGHT)))
    try:
        while True:
            ok, frame = cap.read()
            if not ok: break
            if mirror: frame = cv2.flip(frame, 1)
            h, w = frame.shape[:2]
            yield {"image": frame, "meta": {"ts": time.time(), "w": w, "h": h}}
    finally:
        cap.release()
