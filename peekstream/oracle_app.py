"""HTTP API serving assets, indicators and generated detection rules."""

from __future__ import annotations

import io
import json
import re
from collections.abc import Callable, Iterable
from typing import Any

from werkzeug.exceptions import HTTPException
from werkzeug.routing import Map, Rule
from werkzeug.wrappers import Request, Response

from .ioc import IoC
from .oracle_store import AssetStore, IoCStore

_INDEX = {
    "/": "API routes listing",
    "/assets": "asset listing",
    "/ioc": "GET: serve json list of IoC reports",
}

_INT = re.compile(r"[+-]?[0-9]+")


def _json_response(payload: Any) -> Response:
    body = json.dumps(payload, separators=(",", ":"), sort_keys=isinstance(payload, dict))
    return Response(body, status=200, mimetype="application/json")


def _error(err: BaseException | str) -> Response:
    return Response(f'{{"status": "err", "error": "{err}"}}', status=200)


def _parse_id(raw: str) -> int:
    if not _INT.fullmatch(raw):
        raise ValueError(f'parsing "{raw}": invalid syntax')
    return int(raw)


class OracleApp:
    """WSGI application exposing the indicator and asset stores."""

    def __init__(self, iocs: IoCStore | None = None, assets: AssetStore | None = None) -> None:
        self.iocs = iocs if iocs is not None else IoCStore()
        self.assets = assets if assets is not None else AssetStore()
        self.url_map = Map(
            [
                Rule("/", endpoint="index"),
                Rule("/assets", endpoint="assets", methods=["GET"]),
                Rule("/ioc", endpoint="ioc_serve", methods=["GET"]),
                Rule("/ioc", endpoint="ioc_add", methods=["POST"]),
                Rule("/ioc/rules", endpoint="ioc_rules", methods=["GET"]),
                Rule("/ioc/<ioc_id>", endpoint="ioc_disable", methods=["DELETE"]),
                Rule("/ioc/<ioc_id>", endpoint="ioc_enable", methods=["PUT"]),
            ]
        )
        self._handlers: dict[str, Callable[..., Response]] = {
            "index": self._index,
            "assets": self._assets,
            "ioc_serve": self._ioc_serve,
            "ioc_add": self._ioc_add,
            "ioc_rules": self._ioc_rules,
            "ioc_disable": self._ioc_disable,
            "ioc_enable": self._ioc_enable,
        }

    def __call__(self, environ: dict[str, Any], start_response: Callable) -> Iterable[bytes]:
        request = Request(environ)
        adapter = self.url_map.bind_to_environ(environ)
        try:
            endpoint, args = adapter.match()
            response = self._handlers[endpoint](request, **args)
        except HTTPException as exc:
            return exc(environ, start_response)
        return response(environ, start_response)

    def _index(self, request: Request) -> Response:
        return _json_response(_INDEX)

    def _assets(self, request: Request) -> Response:
        if request.args.get("format") == "arkime":
            out = io.StringIO()
            self.assets.write_wise(out)
            return Response(out.getvalue(), status=200)
        return Response(self.assets.to_json(), status=200, mimetype="application/json")

    def _ioc_serve(self, request: Request) -> Response:
        return _json_response([item.to_dict() for item in self.iocs.values()])

    def _ioc_add(self, request: Request) -> Response:
        def value(key: str) -> str:
            found = request.form.get(key)
            return found if found is not None else request.args.get(key, "")

        item = IoC(enabled=True, type=value("type"), value=value("value"))
        try:
            ioc_id = self.iocs.add(item, keep_id=False)
        except ValueError as err:
            return Response(
                f'{{"status": "err", "value": "{item.value}", "error": "{err}", '
                f'"type": "{item.type}"}}',
                status=500,
            )
        return Response(
            f'{{"status": "ok", "value": "{item.value}", "type": "{item.type}", "id": {ioc_id}}}',
            status=200,
            mimetype="application/json",
        )

    def _toggle(self, raw_id: str, action: Callable[[int], IoC]) -> Response:
        try:
            item = action(_parse_id(raw_id))
        except (ValueError, LookupError) as err:
            return _error(err)
        return _json_response(item.to_dict())

    def _ioc_disable(self, request: Request, ioc_id: str) -> Response:
        return self._toggle(ioc_id, self.iocs.disable)

    def _ioc_enable(self, request: Request, ioc_id: str) -> Response:
        return self._toggle(ioc_id, self.iocs.enable)

    def _ioc_rules(self, request: Request) -> Response:
        body = "".join(item.rule() + "\n" for item in self.iocs.extract())
        return Response(body, status=200)