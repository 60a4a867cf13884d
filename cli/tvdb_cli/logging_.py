from __future__ import annotations

import logging

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

# transport libraries stay quiet unless -v; they log every request at INFO
_TRANSPORT_LOGGERS = ("httpx", "httpcore")


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(level=logging.WARNING, format=LOG_FORMAT)

    # retries and re-authentication are logged by tvdb_client at INFO
    logging.getLogger("tvdb_client").setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in _TRANSPORT_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if verbose else logging.WARNING)
