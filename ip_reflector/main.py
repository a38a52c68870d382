"""Command-line entry point: parse flags, build the app and serve it."""

import argparse
import socket
from collections.abc import Sequence
from pathlib import Path

import uvicorn
from fastapi import FastAPI
from pydantic import ValidationError

from ip_reflector import __version__
from ip_reflector.config import build_settings
from ip_reflector.core.app_factory import create_app
from ip_reflector.exceptions import ListenException, TemplateCompileException
from ip_reflector.logging_config import get_logger, log_with_context, setup_logging

logger = get_logger(__name__)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line flags.

    Flags left out are None so that environment settings and defaults apply.
    """
    parser = argparse.ArgumentParser(
        prog="ip-reflector",
        description="Serve a page showing clients the IP address they connect from.",
    )
    parser.add_argument(
        "--addr",
        type=str,
        help="address to listen on (e.g. 127.0.0.1, [::1]); leave empty for all interfaces",
    )
    parser.add_argument("--port", type=int, help="port to listen on (default 8080)")
    parser.add_argument("--log-level", dest="log_level", type=str, help="log level (default INFO)")
    parser.add_argument("--log-file", dest="log_file", type=Path, help="also write JSON logs to this file")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def bind_socket(addr: str, port: int) -> socket.socket:
    """Create a listening TCP socket.

    An empty address listens on every interface, IPv6 and IPv4 alike when
    the platform supports dual-stack sockets.

    Raises:
        ListenException: If the address cannot be resolved or bound
    """
    try:
        if not addr:
            if socket.has_dualstack_ipv6():
                return socket.create_server(("", port), family=socket.AF_INET6, dualstack_ipv6=True)
            return socket.create_server(("0.0.0.0", port))

        family = socket.getaddrinfo(addr, port, type=socket.SOCK_STREAM, flags=socket.AI_PASSIVE)[0][0]
        return socket.create_server((addr, port), family=family)
    except OSError as e:
        raise ListenException(
            f"Failed to listen on {addr or '*'}:{port}: {e}",
            details={"addr": addr, "port": port, "error": str(e)},
        ) from e


def serve(app: FastAPI, sock: socket.socket) -> None:
    """Run uvicorn on an already bound socket until the process is stopped."""
    # Peer addresses must come from the connection, never from forwarding headers
    config = uvicorn.Config(
        app,
        log_config=None,
        proxy_headers=False,
        access_log=False,
    )
    server = uvicorn.Server(config)
    try:
        server.run(sockets=[sock])
    finally:
        sock.close()


def main(argv: Sequence[str] | None = None) -> int:
    """Start the server.

    Returns:
        Process exit code, non-zero when startup fails
    """
    args = parse_args(argv)

    try:
        settings = build_settings(args)
    except ValidationError as e:
        setup_logging()
        log_with_context(
            logger,
            "critical",
            "Invalid configuration",
            error=str(e),
            event_type="config_invalid",
        )
        return 1

    setup_logging(settings.log_level, settings.log_file)

    try:
        app = create_app(settings)
        sock = bind_socket(settings.addr, settings.port)
    except (TemplateCompileException, ListenException) as e:
        log_with_context(
            logger,
            "critical",
            f"Startup failed: {e.message}",
            error_code=e.code.value,
            error_details=e.details,
            event_type="startup_failed",
        )
        return 1

    log_with_context(
        logger,
        "info",
        f"Server started. Listening on http://localhost:{settings.port} (and on {settings.listen_address})",
        listen_address=settings.listen_address,
        version=__version__,
        event_type="server_started",
    )
    serve(app, sock)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
