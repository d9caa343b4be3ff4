#!/usr/bin/env python3
"""Run the Snippetbox application"""
import argparse

import uvicorn

from snippetbox.core.config import settings
from snippetbox.core.utils.logging_config import init_application_logging


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the Snippetbox web server")
    parser.add_argument("--addr", default=settings.bind_addr, help="host to bind (default: %(default)s)")
    parser.add_argument("--port", type=int, default=settings.bind_port, help="port to bind (default: %(default)s)")
    return parser.parse_args(argv)


def main(argv=None) -> None:
    args = parse_args(argv)
    # The app factory reads the same settings object
    settings.bind_addr = args.addr
    settings.bind_port = args.port
    init_application_logging(settings)

    options = {}
    if settings.tls_enabled:
        options["ssl_certfile"] = settings.tls_cert_file
        options["ssl_keyfile"] = settings.tls_key_file

    uvicorn.run(
        "snippetbox.main:create_app",
        factory=True,
        host=settings.bind_addr,
        port=settings.bind_port,
        log_level="debug" if settings.debug else "info",
        log_config=None,  # keep the handlers installed above
        timeout_graceful_shutdown=settings.shutdown_timeout,
        **options,
    )


if __name__ == "__main__":
    main()
