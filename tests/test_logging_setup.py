import logging
from unittest.mock import patch

import pytest

from bridges.controller import BridgeController
from utils.logging_setup import configure_logging


def test_configure_logging_uses_named_level():
    with patch("logging.basicConfig") as basic_config:
        configure_logging("debug")
    assert basic_config.call_args.kwargs["level"] == logging.DEBUG


def test_configure_logging_unknown_level_falls_back_to_info():
    with patch("logging.basicConfig") as basic_config:
        configure_logging("chatty")
    assert basic_config.call_args.kwargs["level"] == logging.INFO


@pytest.mark.asyncio
async def test_mutations_are_logged(controller: BridgeController, caplog):
    with caplog.at_level(logging.INFO, logger="bridges.controller"):
        bridge = await controller.new_bridge()
        await controller.delete_bridge(bridge.id)
    messages = [record.getMessage() for record in caplog.records]
    assert f"Bridge {bridge.id} upserted" in messages
    assert f"Bridge {bridge.id} deleted" in messages
