"""
Data shapes for the ARI /bridges resource and the media actions scoped to it.

Request types encode to JSON payloads where an unset optional field is left
out entirely so the server applies its own default. Response types decode
leniently: missing or null keys become empty values and unknown keys are ignored.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


def _compact(payload: Dict[str, Any]) -> Dict[str, Any]:
    # Unset means None or "", as with omitempty; 0 and False are real values.
    return {key: value for key, value in payload.items() if value is not None and value != ""}


class BridgeType(str, Enum):
    MIXING = "mixing"
    HOLDING = "holding"
    DTMF_EVENTS = "dtmf_events"
    PROXY_MEDIA = "proxy_media"


@dataclass(eq=False)
class Bridge:
    """
    Point-in-time snapshot of a server-side bridge.

    Only ``id`` identifies the bridge; two snapshots with the same id are
    equal even if the other fields have drifted.
    """
    id: str
    name: str = ""
    technology: str = ""
    bridge_type: str = ""
    bridge_class: str = ""  # opaque, passed through untouched
    creator: str = ""
    channels: List[str] = field(default_factory=list)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Bridge):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Bridge":
        bridge_class = data.get("bridge_class")
        if bridge_class is None:
            bridge_class = data.get("bridge")
        channels = data.get("channels") or []
        if not isinstance(channels, list):
            raise ValueError(f"channels must be a list, got {type(channels).__name__}")
        return cls(
            id=data.get("id") or "",
            name=data.get("name") or "",
            technology=data.get("technology") or "",
            bridge_type=data.get("bridge_type") or "",
            bridge_class=bridge_class or "",
            creator=data.get("creator") or "",
            channels=list(channels),
        )


@dataclass
class CreateBridgeRequest:
    """Body for both POST /bridges and POST /bridges/{id}. Every field is optional."""
    id: Optional[str] = None
    type: Optional[str] = None
    name: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        bridge_type = self.type.value if isinstance(self.type, BridgeType) else self.type
        return _compact({"bridgeId": self.id, "type": bridge_type, "name": self.name})


@dataclass
class AddChannelRequest:
    # Several channels may be joined at once as "id1,id2"; sent as-is.
    channel_id: str
    role: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        return _compact({"channel": self.channel_id, "role": self.role})


@dataclass
class PlayMediaRequest:
    media: str
    lang: Optional[str] = None
    offsetms: Optional[int] = None
    skipms: Optional[int] = None
    playback_id: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        return _compact(
            {
                "media": self.media,
                "lang": self.lang,
                "offsetms": self.offsetms,
                "skipms": self.skipms,
                "playbackId": self.playback_id,
            }
        )


@dataclass
class RecordRequest:
    name: str
    format: str
    max_duration_seconds: Optional[int] = None
    max_silence_seconds: Optional[int] = None
    if_exists: Optional[str] = None  # fail, overwrite, append
    beep: Optional[bool] = None
    terminate_on: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        return _compact(
            {
                "name": self.name,
                "format": self.format,
                "maxDurationSeconds": self.max_duration_seconds,
                "maxSilenceSeconds": self.max_silence_seconds,
                "ifExists": self.if_exists,
                "beep": self.beep,
                "terminateOn": self.terminate_on,
            }
        )


@dataclass
class Playback:
    id: str
    media_uri: str = ""
    target_uri: str = ""
    language: str = ""
    state: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Playback":
        return cls(
            id=data.get("id") or "",
            media_uri=data.get("media_uri") or "",
            target_uri=data.get("target_uri") or "",
            language=data.get("language") or "",
            state=data.get("state") or "",
        )


@dataclass
class LiveRecording:
    name: str
    format: str = ""
    state: str = ""
    target_uri: str = ""
    cause: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LiveRecording":
        return cls(
            name=data.get("name") or "",
            format=data.get("format") or "",
            state=data.get("state") or "",
            target_uri=data.get("target_uri") or "",
            cause=data.get("cause") or "",
        )
