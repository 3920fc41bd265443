"""Preview server for Bramble.

Builds the site once and serves the output directory over HTTP for local
checking before deployment:
- Rejects directory listings and missing paths with a 404 (serving 404.html when present).
- Disables browser caching so a rebuild and refresh always shows fresh files.

There is no file watching; run ``bramble serve`` again after editing content.

Key classes:
- PreviewServer: Builds the site and runs the HTTP server.
- _PreviewHandler: HTTP request handler that enforces 404s.
"""

from __future__ import annotations

import functools
from http.server import SimpleHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path

from .build import BuildResult, build_site, load_config


class _PreviewHandler(SimpleHTTPRequestHandler):
    """HTTP request handler for the built site."""

    def end_headers(self):
        self.send_header("Cache-Control", "no-cache, no-store, must-revalidate")
        super().end_headers()

    def list_directory(self, path):  # pragma: no cover - exercised via send_head
        # Never expose directory listings; treat as missing content.
        return self._serve_404()

    def _serve_404(self):
        """Serve 404.html (when present) with a 404 status."""
        error_page = Path(self.directory) / "404.html"
        if error_page.exists():
            encoded = error_page.read_bytes()
            self.send_response(404)
            self.send_header("Content-type", "text/html; charset=utf-8")
            self.send_header("Content-Length", str(len(encoded)))
            self.end_headers()
            self.wfile.write(encoded)
            return None
        self.send_error(404, "File not found")
        return None

    def send_head(self):
        path_obj = Path(self.translate_path(self.path))
        if path_obj.is_dir():
            if not (path_obj / "index.html").exists():
                return self._serve_404()
        elif not path_obj.exists():
            return self._serve_404()
        return super().send_head()


class PreviewServer:
    """Serves a freshly built site on localhost.

    Attributes:
        project_root: Root directory of the project.
        config: Site configuration.
        output_dir: Directory where the built site is served from.
        http_port: Port for the HTTP server.
    """

    def __init__(self, project_root: Path, http_port: int | None = None):
        """Initialize the preview server.

        Args:
            project_root: Root directory of the project.
            http_port: Optional override for the configured port.
        """
        self.project_root = project_root
        self.config = load_config(project_root)
        self.output_dir = project_root / self.config["output_dir"]
        self.http_port = int(
            http_port if http_port is not None else self.config.get("port", 4000)
        )

    def build(self) -> BuildResult:
        return build_site(self.project_root, output_dir_override=self.output_dir)

    def make_server(self) -> ThreadingHTTPServer:
        handler = functools.partial(_PreviewHandler, directory=str(self.output_dir))
        return ThreadingHTTPServer(("", self.http_port), handler)

    def start(self) -> None:  # pragma: no cover - integration path
        self.build()
        httpd = self.make_server()
        try:
            httpd.serve_forever()
        except KeyboardInterrupt:
            pass
        finally:
            httpd.server_close()
