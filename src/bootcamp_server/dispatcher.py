# Este archivo implementa el dispatcher: resuelve la ruta exacta de cada
# petición y delega en el handler registrado, sin importar el método HTTP.

"""
Exact-path request dispatch on top of http.server.

Paths are compared literally: no prefix matching, no query-string
stripping, no trailing-slash normalization. Unknown paths get the standard
library's default 404 page.
"""
from http import HTTPStatus  # Códigos de estado HTTP
from http.server import BaseHTTPRequestHandler  # Handler base de la librería estándar
from typing import Dict, List, Optional, Type

from .config.settings import ResponseStyle  # Estilo de formato de las respuestas
from .handlers import Handler, health_handler, root_handler  # Handlers de las rutas fijas
from .utils.logging import get_logger  # Logger estructurado

logger = get_logger(__name__)

ROOT_PATH = "/"
HEALTH_PATH = "/health"


class Router:
    """Maps literal request paths to handlers."""

    def __init__(self):
        self._routes: Dict[str, Handler] = {}

    def register(self, path: str, handler: Handler) -> None:
        self._routes[path] = handler

    def resolve(self, path: str) -> Optional[Handler]:
        return self._routes.get(path)

    @property
    def paths(self) -> List[str]:
        return list(self._routes)


def default_router() -> Router:
    """Router with the two fixed endpoints registered."""
    router = Router()
    router.register(ROOT_PATH, root_handler)
    router.register(HEALTH_PATH, health_handler)
    return router


class DispatchingRequestHandler(BaseHTTPRequestHandler):
    """
    Request handler that answers every HTTP method the same way.

    Subclasses produced by make_request_handler() bind the router and the
    response style as class attributes, since http.server instantiates the
    handler class once per request.
    """

    router: Router
    style: ResponseStyle = ResponseStyle.LINES

    def _discard_request_body(self) -> None:
        # Unread bytes on close make the kernel reset the connection
        length = int(self.headers.get("Content-Length") or 0)
        if length > 0:
            self.rfile.read(length)

    def _dispatch(self, include_body: bool = True) -> None:
        self._discard_request_body()

        handler = self.router.resolve(self.path)
        if handler is None:
            self.send_error(HTTPStatus.NOT_FOUND)
            return

        body = handler(self.style).encode("utf-8")
        self.send_response(HTTPStatus.OK)
        self.send_header("Content-Type", "text/plain; charset=utf-8")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        if include_body:
            self.wfile.write(body)

    def do_GET(self):
        self._dispatch()

    do_POST = do_GET
    do_PUT = do_GET
    do_PATCH = do_GET
    do_DELETE = do_GET
    do_OPTIONS = do_GET

    def do_HEAD(self):
        self._dispatch(include_body=False)

    def log_message(self, format, *args):
        logger.debug(
            "request_handled",
            client=self.address_string(),
            message=format % args
        )


def make_request_handler(
    router: Optional[Router] = None,
    style: ResponseStyle = ResponseStyle.LINES
) -> Type[DispatchingRequestHandler]:
    """
    Build a request handler class bound to a router and response style.

    Args:
        router: Routes to dispatch to (default: the two fixed endpoints)
        style: Formatting applied to every response body

    Returns:
        A DispatchingRequestHandler subclass for use with an HTTP server
    """
    return type(
        "BoundRequestHandler",
        (DispatchingRequestHandler,),
        {"router": router or default_router(), "style": style},
    )
