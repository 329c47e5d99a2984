"""
用户可见的提示
User-visible Notices
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class NoticeKind(Enum):
    """提示类型"""
    MODEL_LOAD_FAILURE = "model_load_failure"
    MODEL_NOT_READY = "model_not_ready"
    PREDICTION_FAILURE = "prediction_failure"
    CAMERA_UNAVAILABLE = "camera_unavailable"


DEFAULT_MESSAGES = {
    NoticeKind.MODEL_LOAD_FAILURE: "Failed to load the model.",
    NoticeKind.MODEL_NOT_READY: "The model is not ready yet.",
    NoticeKind.PREDICTION_FAILURE: "Failed to predict the move.",
    NoticeKind.CAMERA_UNAVAILABLE: "The camera is not available.",
}


@dataclass(frozen=True)
class Notice:
    kind: NoticeKind
    message: str
    timestamp: datetime = field(default_factory=datetime.now)

    @classmethod
    def of(cls, kind: NoticeKind) -> "Notice":
        return cls(kind=kind, message=DEFAULT_MESSAGES[kind])
