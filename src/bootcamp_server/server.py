# Este es el servidor principal: resuelve la configuración, inicializa el
# logging, registra las dos rutas y ejecuta el listener HTTP bloqueante.

"""
Bootcamp HTTP server.

Builds the listener from an explicit Settings value and maps listener
failures to the configured variant's policy: fatal with a non-zero exit
status, or logged and otherwise ignored.
"""
import sys
from http.server import ThreadingHTTPServer  # Un hilo por conexión
from typing import Optional

from .config.settings import Settings, get_settings  # Configuración y singleton
from .dispatcher import Router, make_request_handler  # Dispatcher por ruta exacta
from .exceptions import BindError, ConfigurationError  # Excepciones personalizadas
from .utils.logging import setup_logging, get_logger  # Sistema de logging estructurado

logger = get_logger(__name__)

SERVICE_NAME = "bootcamp-server"


class BootcampHTTPServer(ThreadingHTTPServer):
    """Thread-per-connection listener that never shares its port."""

    # A second instance on the same port must fail to bind
    allow_reuse_port = False


def create_server(settings: Settings, router: Optional[Router] = None) -> BootcampHTTPServer:
    """
    Bind the HTTP listener for the given settings.

    Args:
        settings: Resolved application settings
        router: Routes to serve (default: "/" and "/health")

    Returns:
        A bound, not yet serving, BootcampHTTPServer

    Raises:
        BindError: If the listen address cannot be bound
    """
    address = settings.listen_address
    handler_class = make_request_handler(router, settings.response_style)

    try:
        server = BootcampHTTPServer((address.host, address.port), handler_class)
    except OSError as e:
        raise BindError(
            f"Failed to bind {address}: {e}",
            context={"host": address.host, "port": address.port, "errno": e.errno}
        ) from e

    return server


def serve(settings: Settings, router: Optional[Router] = None) -> int:
    """
    Run the server until interrupted.

    Args:
        settings: Resolved application settings
        router: Routes to serve (default: "/" and "/health")

    Returns:
        Process exit status
    """
    address = settings.listen_address
    logger.info(
        "server_starting",
        variant=settings.variant.value,
        host=address.host,
        port=address.port
    )

    try:
        server = create_server(settings, router)
    except BindError as e:
        if settings.fatal_bind_errors:
            logger.error("server_bind_failed", error=str(e), **e.context)
            return 1
        logger.warning("server_bind_failed_ignored", error=str(e), **e.context)
        return 0

    with server:
        logger.info(
            "server_listening",
            host=address.host,
            port=server.server_address[1],
            paths=server.RequestHandlerClass.router.paths
        )
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            logger.info("server_shutdown", reason="keyboard_interrupt")

    return 0


def main():
    """
    Main entry point for running the server.

    Can be invoked via:
    - python -m bootcamp_server
    - the bootcamp-server console script
    """
    # Defaults until the configured level is known
    setup_logging()

    try:
        settings = get_settings()
    except ConfigurationError as e:
        logger.error("configuration_invalid", error=str(e), **e.context)
        sys.exit(1)

    setup_logging(
        level=settings.log_level,
        json_logs=settings.log_json,
        static_fields={"service": SERVICE_NAME, "variant": settings.variant.value}
    )
    sys.exit(serve(settings))


if __name__ == "__main__":
    main()
