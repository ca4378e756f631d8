from bridges.controller import BridgeController
from bridges.models import (
    AddChannelRequest,
    Bridge,
    BridgeType,
    CreateBridgeRequest,
    LiveRecording,
    PlayMediaRequest,
    Playback,
    RecordRequest,
)

__all__ = [
    "AddChannelRequest",
    "Bridge",
    "BridgeController",
    "BridgeType",
    "CreateBridgeRequest",
    "LiveRecording",
    "PlayMediaRequest",
    "Playback",
    "RecordRequest",
]
