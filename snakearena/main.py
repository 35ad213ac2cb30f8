"""Command line entry point: serve the game over HTTP and WebSocket."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from aiohttp import WSMsgType, web

from .server import GameServer

logger = logging.getLogger(__name__)


def create_app(server: GameServer, static_dir) -> web.Application:
    """Build the web application: the game socket at /ws and static files elsewhere."""
    static_path = Path(static_dir)
    app = web.Application()

    async def websocket_handler(request: web.Request) -> web.WebSocketResponse:
        ws = web.WebSocketResponse()
        await ws.prepare(request)
        player = await server.handle_new_player(ws)
        if player is None:
            return ws
        try:
            async for msg in ws:
                if msg.type != WSMsgType.TEXT:
                    break
                try:
                    data = json.loads(msg.data)
                except ValueError as exc:
                    logger.info("Error reading message: %s", exc)
                    break
                if not isinstance(data, dict):
                    logger.info("Error reading message: not an object")
                    break
                await server.handle_message(player, data)
        finally:
            await server.remove_player(player)
        return ws

    async def index_handler(request: web.Request) -> web.FileResponse:
        index = static_path / "index.html"
        if not index.is_file():
            raise web.HTTPNotFound()
        return web.FileResponse(index)

    app.router.add_get("/ws", websocket_handler)
    app.router.add_get("/", index_handler)
    if static_path.is_dir():
        app.router.add_static("/", static_path)
    return app


def _split_addr(addr: str) -> tuple[str | None, int]:
    host, sep, port_text = addr.rpartition(":")
    if not sep or not port_text.isdigit():
        raise ValueError(f"invalid address {addr!r}")
    port = int(port_text)
    if port > 65535:
        raise ValueError(f"invalid port in {addr!r}")
    return (host or None), port


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command line options, adding host and port taken from --addr."""
    parser = argparse.ArgumentParser(description="Multiplayer snake game server.")
    parser.add_argument("--addr", default=":8981", help="http service address")
    parser.add_argument("--static", default="static", help="directory of static files")
    args = parser.parse_args(argv)
    try:
        args.host, args.port = _split_addr(args.addr)
    except ValueError as exc:
        parser.error(str(exc))
    return args


def main(argv=None) -> None:
    """Run the game server until interrupted."""
    args = parse_args(argv)
    logging.basicConfig(level=logging.INFO)
    server = GameServer(30, 20)
    app = create_app(server, args.static)
    logger.info("服务器启动在 %s", args.addr)
    web.run_app(app, host=args.host, port=args.port, print=None)


if __name__ == "__main__":
    main()