"""HTTP application and command-line entry point."""

from __future__ import annotations

import argparse
import logging

from flask import Flask, Response, request

from textforge.ai import ChatClient
from textforge.cache import TextCache, every_minute
from textforge.config import ConfigError, load_config
from textforge.handlers import RequestError, TextService
from textforge.responses import render, response_type

log = logging.getLogger(__name__)


def _endpoint(action):
    def view() -> Response:
        params = request.form if request.method == "POST" else request.args
        kind = response_type(params.get("type", ""))
        try:
            obj, status = action(params), 200
        except RequestError as exc:
            obj, status = {"error": str(exc)}, exc.status_code
        try:
            rendered = render(obj, kind, request.args.get("callback", ""))
        except ValueError:
            return Response(b"", status=500)
        if rendered is None:
            return Response(b"", status=200)
        body, content_type = rendered
        return Response(body, status=status, content_type=content_type)

    return view


def create_app(service: TextService) -> Flask:
    """Build the application serving /transform, /generate and /assist."""
    app = Flask(__name__)
    methods = ["GET", "POST"]
    app.add_url_rule("/transform", "transform", _endpoint(service.transform), methods=methods)
    app.add_url_rule("/generate", "generate", _endpoint(service.generate), methods=methods)
    app.add_url_rule("/assist", "assist", lambda: Response(b"", status=200), methods=methods)
    return app


def main(argv=None) -> int:
    """Load the configuration, start the cache sweeper and serve HTTP."""
    parser = argparse.ArgumentParser(prog="textforge")
    parser.add_argument("--config", default="./config.ini")
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO)

    try:
        config = load_config(args.config)
    except ConfigError as exc:
        log.error("load_config error: %s", exc)
        return 1

    cache = TextCache(config.cache)
    ticker = every_minute(cache.remove_deprecated)
    cache.remove_deprecated()
    app = create_app(TextService(ChatClient(config.openai), cache))
    try:
        app.run(host=config.server.host, port=config.server.port)
    except KeyboardInterrupt:
        pass
    finally:
        ticker.stop()
    log.info("shutting down")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())