"""Tests for the phase-one item collector."""

import pytest

from xtentropy.scanner.collector import NO_VOLUME_MESSAGE, ItemCollector
from xtentropy.volumes.models import ContractViolation, Volume


class TestItemCollector:
    def test_appends_in_order(self, fake_host):
        collector = ItemCollector(fake_host)
        vol = Volume(key="C")
        vol.allocate(3)
        for item_id in (5, 3, 9):
            assert collector.collect(vol, item_id) is True
        assert vol.item_ids == [5, 3, 9]
        assert fake_host.messages == []

    def test_capacity_plus_one_rejected(self, fake_host):
        collector = ItemCollector(fake_host)
        vol = Volume(key="C")
        vol.allocate(2)
        collector.collect(vol, 1)
        collector.collect(vol, 2)
        with pytest.raises(ContractViolation):
            collector.collect(vol, 3)
        assert vol.fill_count == 2

    def test_missing_volume_reported(self, fake_host):
        collector = ItemCollector(fake_host)
        assert collector.collect(None, 1) is False
        assert fake_host.messages == [NO_VOLUME_MESSAGE]
