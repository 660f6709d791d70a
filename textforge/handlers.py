"""Transform and generate requests: validation, prompts, caching."""

from __future__ import annotations

import base64
import hashlib
import re
from typing import Mapping

from textforge.ai import AIError
from textforge.cache import TextCache
from textforge.responses import parse_int

_MIN_CID_LENGTH = 32
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


class RequestError(Exception):
    """Raised when a request cannot be served; the message goes to the client."""

    status_code = 400


def string_to_base64(text: str) -> str:
    """Return *text* as standard base64, or '' for empty text."""
    if not text:
        return ""
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def string_to_cid(text: str) -> str:
    """Return the hex SHA-256 digest of *text*."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def _byte_length(value: str) -> int:
    return len(value.encode("utf-8"))


def _query_unescape(text: str) -> str:
    """Decode a query-escaped string, rejecting malformed percent escapes."""
    match = _BAD_ESCAPE.search(text)
    if match:
        bad = text[match.start() : match.start() + 3]
        raise RequestError(f'bad request: need valid text, invalid URL escape "{bad}"')
    return _unquote_plus(text)


def _unquote_plus(text: str) -> str:
    from urllib.parse import unquote_plus

    return unquote_plus(text, errors="replace")


def build_transform_prompt(lang: str, style: str, format: str, text: str) -> str:
    """Return the instruction sent to the model for a transform request."""
    parts = []
    if style:
        parts.append(f"Стиль → {style}. ")
    if lang:
        parts.append(f"Язык → {lang}. ")
    if format:
        parts.append(f"Формат → {format}. ")
    parts.append(f"Текст для обработки → {text}")
    return "".join(parts)


def build_generate_prompt(lang: str, style: str, format: str, text: str, length: int) -> str:
    """Return the instruction sent to the model for a generate request."""
    prompt = (
        f"Сгенерируй текст по запросу ({text}), на языке ({lang}), в стилистике ({style})"
    )
    if format:
        prompt += f", затем приведи к формату ({format})"
    if length > 0:
        prompt += f", и пожалуйста ограничь длину текста до ({length}) символов."
    return prompt


class TextService:
    """Serves transform and generate requests using a chat client and a cache."""

    def __init__(self, ai, cache: TextCache):
        self.ai = ai
        self.cache = cache

    def transform(self, params: Mapping[str, str]) -> dict[str, str]:
        """Rewrite a text in a language, style or format; cache the result."""
        lang = params.get("lang", "")
        style = params.get("style", "")
        fmt = params.get("format", "")
        cid = params.get("cid", "")
        text = params.get("text", "")
        ttl_text = params.get("cache", "")

        no_action = not lang and not style and not fmt

        if _byte_length(cid) >= _MIN_CID_LENGTH and no_action:
            return {"text": string_to_base64(self.cache.get(cid)), "cid": cid}

        text = _query_unescape(text)

        if no_action:
            raise RequestError("bad request: need valid lang, style or format")

        if _byte_length(cid) < _MIN_CID_LENGTH:
            cid = string_to_cid(style + lang + fmt + text)
            cached = self.cache.get(cid)
            if cached:
                return {"text": string_to_base64(cached), "cid": cid}

        try:
            result = self.ai.transform(build_transform_prompt(lang, style, fmt, text))
        except AIError as exc:
            raise RequestError(f"bad request: {exc}") from exc

        ttl = parse_int(ttl_text)
        if ttl > 0:
            self.cache.add(cid, result, ttl)
        else:
            self.cache.remove(cid)

        return {"text": string_to_base64(result), "cid": cid}

    def generate(self, params: Mapping[str, str]) -> dict[str, str]:
        """Write a new text on a topic in a language and style."""
        lang = params.get("lang", "")
        style = params.get("style", "")
        fmt = params.get("format", "")
        text = params.get("text", "")
        length_text = params.get("len", "")

        if not lang:
            raise RequestError("bad request: lang is not valid")
        if not style:
            raise RequestError("bad request: style is not valid")
        if not text:
            raise RequestError("bad request: text is not valid")

        text = _query_unescape(text)

        length = parse_int(length_text)
        if length_text and length <= 0:
            raise RequestError("bad request: len is not valid")

        try:
            result = self.ai.generate(build_generate_prompt(lang, style, fmt, text, length))
        except AIError as exc:
            raise RequestError(f"bad request: {exc}") from exc

        return {"text": string_to_base64(result)}