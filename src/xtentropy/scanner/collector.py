"""Phase one — buffer each discovered item under the current volume."""

from __future__ import annotations

from typing import Optional

from xtentropy.host.protocol import Host
from xtentropy.volumes.models import Volume

NO_VOLUME_MESSAGE = "XT_ENTROPY: Unable to Associate the File with a Volume. Exiting..."


class ItemCollector:
    def __init__(self, host: Host) -> None:
        self._host = host

    def collect(self, volume: Optional[Volume], item_id: int) -> bool:
        """Append *item_id* to *volume*. Returns False if there is no volume.

        A full or non-collecting volume raises ``ContractViolation``: the host
        enumerated more items than it announced.
        """
        if volume is None:
            self._host.output_message(NO_VOLUME_MESSAGE)
            return False
        volume.append(item_id)
        return True
