import logging
import uuid
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, TypeVar

from bridges.models import (
    AddChannelRequest,
    Bridge,
    CreateBridgeRequest,
    LiveRecording,
    PlayMediaRequest,
    Playback,
    RecordRequest,
)
from core.ari_client import AriClient
from core.errors import TransportError


logger = logging.getLogger(__name__)

BRIDGES_ROOT = "/bridges"

T = TypeVar("T")


@dataclass
class RemoveChannelRequest:
    channel_id: str

    def to_payload(self) -> Dict[str, Any]:
        return {"channel": self.channel_id}


@dataclass
class MohRequest:
    moh_class: str = ""

    def to_payload(self) -> Dict[str, Any]:
        # Empty class means the server default, so the key is left out.
        if not self.moh_class:
            return {}
        return {"mohClass": self.moh_class}


def _new_unique_id() -> str:
    return str(uuid.uuid4())


class BridgeController:
    """
    Operations on the ARI /bridges resource.

    Each method is a single round trip through the AriClient. Nothing is
    cached and bridge state is always whatever the server last returned.
    Ids are concatenated into the path unescaped.
    """

    def __init__(
        self,
        ari_client: AriClient,
        id_factory: Optional[Callable[[], str]] = None,
    ):
        self.ari_client = ari_client
        self.id_factory = id_factory or _new_unique_id

    @staticmethod
    def _path(bridge_id: str, *suffix: str) -> str:
        return "/".join((BRIDGES_ROOT, bridge_id) + suffix)

    @staticmethod
    def _decode(method: str, path: str, data: Any, factory: Callable[[Dict[str, Any]], T]) -> T:
        if not isinstance(data, dict):
            raise TransportError(method, path, f"expected a JSON object, got {type(data).__name__}")
        try:
            return factory(data)
        except (TypeError, ValueError) as exc:
            raise TransportError(method, path, f"malformed response body: {exc}") from exc

    async def list_bridges(self, timeout: Optional[float] = None) -> List[Bridge]:
        data = await self.ari_client.get(BRIDGES_ROOT, timeout=timeout)
        if data is None:
            return []
        if not isinstance(data, list):
            raise TransportError("GET", BRIDGES_ROOT, f"expected a JSON array, got {type(data).__name__}")
        return [self._decode("GET", BRIDGES_ROOT, item, Bridge.from_dict) for item in data]

    async def create_bridge(
        self, req: CreateBridgeRequest, timeout: Optional[float] = None
    ) -> Bridge:
        data = await self.ari_client.post(BRIDGES_ROOT, json=req.to_payload(), timeout=timeout)
        bridge = self._decode("POST", BRIDGES_ROOT, data, Bridge.from_dict)
        logger.info("Bridge %s created (type=%s)", bridge.id, bridge.bridge_type)
        return bridge

    async def upsert_bridge(
        self, bridge_id: str, req: CreateBridgeRequest, timeout: Optional[float] = None
    ) -> Bridge:
        path = self._path(bridge_id)
        data = await self.ari_client.post(path, json=req.to_payload(), timeout=timeout)
        bridge = self._decode("POST", path, data, Bridge.from_dict)
        logger.info("Bridge %s upserted", bridge_id)
        return bridge

    async def new_bridge(self, timeout: Optional[float] = None) -> Bridge:
        """Create a bridge under a freshly generated id, with server defaults otherwise."""
        bridge_id = self.id_factory()
        return await self.upsert_bridge(
            bridge_id, CreateBridgeRequest(id=bridge_id), timeout=timeout
        )

    async def get_bridge(self, bridge_id: str, timeout: Optional[float] = None) -> Bridge:
        path = self._path(bridge_id)
        data = await self.ari_client.get(path, timeout=timeout)
        return self._decode("GET", path, data, Bridge.from_dict)

    async def add_channel(
        self, bridge_id: str, req: AddChannelRequest, timeout: Optional[float] = None
    ) -> None:
        await self.ari_client.post(
            self._path(bridge_id, "addChannel"), json=req.to_payload(), timeout=timeout
        )
        logger.info("Channel(s) %s added to bridge %s", req.channel_id, bridge_id)

    async def remove_channel(
        self, bridge_id: str, channel_id: str, timeout: Optional[float] = None
    ) -> None:
        req = RemoveChannelRequest(channel_id)
        await self.ari_client.post(
            self._path(bridge_id, "removeChannel"), json=req.to_payload(), timeout=timeout
        )
        logger.info("Channel %s removed from bridge %s", channel_id, bridge_id)

    async def play_music_on_hold(
        self, bridge_id: str, moh_class: str = "", timeout: Optional[float] = None
    ) -> None:
        req = MohRequest(moh_class)
        await self.ari_client.post(
            self._path(bridge_id, "moh"), json=req.to_payload(), timeout=timeout
        )
        logger.info("Music on hold started on bridge %s class=%s", bridge_id, moh_class or "default")

    async def play_to_bridge(
        self, bridge_id: str, req: PlayMediaRequest, timeout: Optional[float] = None
    ) -> Playback:
        path = self._path(bridge_id, "play")
        data = await self.ari_client.post(path, json=req.to_payload(), timeout=timeout)
        playback = self._decode("POST", path, data, Playback.from_dict)
        logger.info("Playback %s of %s started on bridge %s", playback.id, req.media, bridge_id)
        return playback

    async def play_to_bridge_by_id(
        self,
        bridge_id: str,
        playback_id: str,
        req: PlayMediaRequest,
        timeout: Optional[float] = None,
    ) -> Playback:
        path = self._path(bridge_id, "play", playback_id)
        data = await self.ari_client.post(path, json=req.to_payload(), timeout=timeout)
        playback = self._decode("POST", path, data, Playback.from_dict)
        logger.info("Playback %s of %s started on bridge %s", playback_id, req.media, bridge_id)
        return playback

    async def record_bridge(
        self, bridge_id: str, req: RecordRequest, timeout: Optional[float] = None
    ) -> LiveRecording:
        path = self._path(bridge_id, "record")
        data = await self.ari_client.post(path, json=req.to_payload(), timeout=timeout)
        recording = self._decode("POST", path, data, LiveRecording.from_dict)
        logger.info("Recording %s started on bridge %s", req.name, bridge_id)
        return recording

    async def delete_bridge(self, bridge_id: str, timeout: Optional[float] = None) -> None:
        """Destroy the bridge. Member channels are released, not hung up."""
        await self.ari_client.delete(self._path(bridge_id), timeout=timeout)
        logger.info("Bridge %s deleted", bridge_id)

    async def stop_music_on_hold(self, bridge_id: str, timeout: Optional[float] = None) -> None:
        # Only stops MOH started through play_music_on_hold.
        await self.ari_client.delete(self._path(bridge_id, "moh"), timeout=timeout)
        logger.info("Music on hold stopped on bridge %s", bridge_id)
