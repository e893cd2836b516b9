"""Run the bridge: ``python -m geoclue_bridge``.

Exits with status 1 when the bus or the GeoClue2 client cannot be set up,
or when the bus connection dies. Otherwise it runs until interrupted.
"""

from __future__ import annotations

import logging

from geoclue_bridge.bridge import GeoClueBridge, TransportFactory, connect_system_bus
from geoclue_bridge.config import BridgeConfig
from geoclue_bridge.exceptions import BridgeError

_logger = logging.getLogger("geoclue_bridge")


def main(transport_factory: TransportFactory = connect_system_bus) -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        with GeoClueBridge(BridgeConfig(), transport_factory=transport_factory) as bridge:
            bridge.run_forever()
    except BridgeError as exc:
        _logger.error("Fatal: %s", exc)
        return 1
    except KeyboardInterrupt:
        _logger.info("Interrupted, exiting")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
