"""Request value checks and rendering of response bodies in many formats."""

from __future__ import annotations

import json
import re
from typing import Any, Mapping

import tomli_w
import yaml

_INT_RE = re.compile(r"[+-]?[0-9]+")
_JSON = "application/json; charset=utf-8"


def parse_int(text) -> int:
    """Return *text* as a 64-bit integer, or 0 when it is empty or invalid."""
    if not text or not _INT_RE.fullmatch(text):
        return 0
    value = int(text)
    return value if -(2**63) <= value < 2**63 else 0


def response_type(value) -> str:
    """Return the requested response type, defaulting to JSON."""
    return value or "json"


def _go_str(value: Any) -> str:
    if value is None:
        return "<nil>"
    if isinstance(value, bool):
        return str(value).lower()
    return str(value)


def format_as_ini(obj: Mapping[str, Any]) -> str:
    """Render *obj* as ``key = value`` lines."""
    return "\n".join(f"{key} = {_go_str(value)}" for key, value in obj.items())


def _json(obj, indent=None, escape_html=True) -> str:
    separators = None if indent else (",", ":")
    text = json.dumps(obj, ensure_ascii=False, sort_keys=True, indent=indent, separators=separators)
    text = text.replace("\u2028", "\\u2028").replace("\u2029", "\\u2029")
    if escape_html:
        text = text.replace("&", "\\u0026").replace("<", "\\u003c").replace(">", "\\u003e")
    return text


_JS_ESCAPES = {"\\": "\\\\", "'": "\\'", '"': '\\"', "<": "\\u003C", ">": "\\u003E",
               "&": "\\u0026", "=": "\\u003D"}
_JS_ESCAPES.update({chr(code): f"\\u{code:04X}" for code in range(0x20)})

_XML_ESCAPES = str.maketrans({'"': "&#34;", "'": "&#39;", "&": "&amp;", "<": "&lt;",
                              ">": "&gt;", "\t": "&#x9;", "\n": "&#xA;", "\r": "&#xD;"})


def _jsonp(obj, callback: str) -> str:
    body = _json(obj)
    return f"{callback.translate(str.maketrans(_JS_ESCAPES))}({body});" if callback else body


def _secure_json(obj) -> str:
    body = _json(obj)
    return "while(1);" + body if body.startswith("[") and body.endswith("]") else body


def _xml(obj) -> str:
    items = "".join(f"<{k}>{_go_str(v).translate(_XML_ESCAPES)}</{k}>" for k, v in obj.items())
    return f"<map>{items}</map>"


_RENDERERS = {
    "json": (lambda obj, _: _json(obj), _JSON),
    "jsonp": (_jsonp, "application/javascript; charset=utf-8"),
    "securejson": (lambda obj, _: _secure_json(obj), _JSON),
    "indentedjson": (lambda obj, _: _json(obj, indent=4), _JSON),
    "asciijson": (
        lambda obj, _: "".join(c if ord(c) < 128 else f"\\u{ord(c):04x}" for c in _json(obj)),
        "application/json",
    ),
    "purejson": (lambda obj, _: _json(obj, escape_html=False) + "\n", _JSON),
    "xml": (lambda obj, _: _xml(obj), "application/xml; charset=utf-8"),
    "yaml": (
        lambda obj, _: yaml.safe_dump(obj, allow_unicode=True, default_flow_style=False),
        "application/x-yaml; charset=utf-8",
    ),
    "toml": (lambda obj, _: tomli_w.dumps(dict(sorted(obj.items()))),
             "application/toml; charset=utf-8"),
    "ini": (lambda obj, _: format_as_ini(obj), "text/plain; charset=utf-8"),
}


def render(obj: Mapping[str, Any], kind: str, callback: str = "") -> tuple[bytes, str] | None:
    """Encode *obj* as *kind* and return ``(body, content_type)``.

    Unknown kinds give ``None``; ``html`` and ``protobuf`` raise ``ValueError``.
    """
    key = kind.lower()
    if key in ("html", "protobuf"):
        raise ValueError(f"cannot render a response as {kind}")
    if key not in _RENDERERS:
        return None
    encode, content_type = _RENDERERS[key]
    return encode(dict(obj), callback or "").encode("utf-8"), content_type