import itertools
import json
from typing import Dict, List, Optional

import httpx
import pytest

from bridges.controller import BridgeController
from config.settings import AriSettings
from core.ari_client import AriClient


BASE_URL = "http://ari.test/ari"


class FakeAri:
    """In-memory stand-in for the Asterisk /bridges resource."""

    def __init__(self) -> None:
        self.bridges: Dict[str, dict] = {}
        self.seen_ids: List[str] = []
        self.requests: List[httpx.Request] = []
        self.moh: Dict[str, Optional[str]] = {}
        self._counter = itertools.count(1)

    def _bridge(self, bridge_id: str, body: dict) -> dict:
        return {
            "id": bridge_id,
            "name": body.get("name", ""),
            "technology": "simple_bridge",
            "bridge_type": body.get("type", "mixing"),
            "bridge_class": "stasis",
            "creator": "Stasis",
            "channels": [],
        }

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        body = json.loads(request.content) if request.content else {}
        parts = request.url.path.split("/")[3:]  # strip "", "ari", "bridges"
        method = request.method

        if not parts:
            if method == "GET":
                return httpx.Response(200, json=list(self.bridges.values()))
            bridge_id = body.get("bridgeId") or f"srv-{next(self._counter)}"
            if bridge_id in self.bridges:
                return httpx.Response(409, json={"message": "Bridge with id already exists"})
            self.seen_ids.append(bridge_id)
            self.bridges[bridge_id] = self._bridge(bridge_id, body)
            return httpx.Response(200, json=self.bridges[bridge_id])

        bridge_id, action = parts[0], parts[1:]
        if not action and method == "POST":
            if bridge_id in self.bridges:
                existing = self.bridges[bridge_id]
                if "name" in body:
                    existing["name"] = body["name"]
                if "type" in body:
                    existing["bridge_type"] = body["type"]
            else:
                self.seen_ids.append(bridge_id)
                self.bridges[bridge_id] = self._bridge(bridge_id, body)
            return httpx.Response(200, json=self.bridges[bridge_id])

        if bridge_id not in self.bridges:
            return httpx.Response(404, json={"message": "Bridge not found"})
        bridge = self.bridges[bridge_id]

        if not action:
            if method == "GET":
                return httpx.Response(200, json=bridge)
            del self.bridges[bridge_id]
            return httpx.Response(204)

        name = action[0]
        if name == "addChannel":
            for channel in body["channel"].split(","):
                if channel not in bridge["channels"]:
                    bridge["channels"].append(channel)
            return httpx.Response(204)
        if name == "removeChannel":
            if body["channel"] not in bridge["channels"]:
                return httpx.Response(422, json={"message": "Channel not in bridge"})
            bridge["channels"].remove(body["channel"])
            return httpx.Response(204)
        if name == "moh":
            if method == "POST":
                self.moh[bridge_id] = body.get("mohClass")
            else:
                self.moh.pop(bridge_id, None)
            return httpx.Response(204)
        if name == "play":
            playback_id = action[1] if len(action) > 1 else body.get("playbackId", "pb-1")
            return httpx.Response(
                201,
                json={
                    "id": playback_id,
                    "media_uri": body["media"],
                    "target_uri": f"bridge:{bridge_id}",
                    "language": body.get("lang", "en"),
                    "state": "queued",
                },
            )
        if name == "record":
            return httpx.Response(
                201,
                json={
                    "name": body["name"],
                    "format": body["format"],
                    "state": "recording",
                    "target_uri": f"bridge:{bridge_id}",
                },
            )
        return httpx.Response(404, json={"message": "Invalid resource"})


@pytest.fixture
def ari_settings() -> AriSettings:
    return AriSettings(
        base_url=BASE_URL,
        username="asterisk",
        password="secret",
    )


@pytest.fixture
def fake_ari() -> FakeAri:
    return FakeAri()


@pytest.fixture
def controller(fake_ari: FakeAri, ari_settings: AriSettings) -> BridgeController:
    client = AriClient(ari_settings, transport=httpx.MockTransport(fake_ari.handle))
    return BridgeController(client)
