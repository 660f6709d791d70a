# textforge

textforge is a small HTTP service that rewrites and generates text with a
chat-completion model. Rewritten text can be kept in an on-disk cache for a
chosen number of seconds, so repeated requests are answered without asking
the model again.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Configuration

The service reads an INI file, `./config.ini` by default. All keys live at the
top level of the file (before any section header) and all are required:

```
host = 127.0.0.1
port = 8080
openai = placeholder
cache = ./cache
```

- `host`, `port` – address the server listens on.
- `openai` – API key sent as a bearer token to the chat-completion service.
- `cache` – directory in which cached results are stored.

Values may be wrapped in single or double quotes. A missing file, a missing or
empty key, or a `port` that is not an integer makes `load_config` raise
`ConfigError`.

## Running

```
textforge
textforge --config /path/to/config.ini
```

If the configuration cannot be loaded, the error is logged and the command
exits with status 1. Otherwise expired cache entries are swept once at
start-up and then once a minute on a background thread, and the server runs
until it is interrupted.

## Endpoints

Every endpoint accepts both `GET` (query string) and `POST` (form fields).
Returned text is Base64-encoded. The `text` parameter is additionally
percent-decoded by the service; a malformed escape such as `%zz` is rejected.

### `/transform`

Rewrites `text` according to any of `lang`, `style` and `format` (at least one
is required). The response carries `text` and a `cid`, the SHA-256 hex digest
of `style + lang + format + text`, which identifies the request.

- With `cache=<seconds>` (a positive integer) the result is stored for that
  long; otherwise any cached entry for that `cid` is removed.
- A request that carries only a `cid` of 32 or more characters (no `lang`,
  `style` or `format`) returns the cached text for it, or an empty `text` if
  nothing is cached.
- If a result for the computed `cid` is already cached, it is returned without
  asking the model.

### `/generate`

Generates new text from the prompt in `text`, in language `lang` and style
`style` (all three required). `format` reshapes the result and `len` limits
its length in characters; `len` must be a positive integer when given. The
response carries only `text`.

### `/assist`

Reserved; returns an empty body with status 200.

### Response formats

The `type` parameter picks the response encoding (case-insensitive):
`json` (default), `jsonp`, `securejson`, `indentedjson`, `asciijson`,
`purejson`, `xml`, `yaml`, `toml` or `ini`. For `jsonp` the query parameter
`callback` names the wrapping function. Errors are reported with status 400
and an `error` field.

## What it does not do

- `html` and `protobuf` are accepted as type names but cannot be rendered;
  such requests get an empty body with status 500.
- Any other unknown `type` gets an empty body with status 200.
- Cache files are named `<stamp>:<ttl>.txt`, so the cache needs a filesystem
  that allows `:` in file names.

## Using it as a library

```python
from textforge.ai import ChatClient
from textforge.cache import TextCache
from textforge.handlers import TextService
from textforge.app import create_app

service = TextService(ChatClient(api_key="placeholder"), TextCache("./cache"))
app = create_app(service)
```

Other pieces can be used on their own:

- `textforge.config.load_config(path)` returns a `Config` with `server`
  (`ServerConfig` with `host` and `port`), `openai` and `cache`.
- `textforge.ai.ChatClient` takes an optional `base_url` and `http_client`
  (an `httpx.Client`); `complete(model, system_prompt, text)` returns the
  first answer, and `transform` / `generate` use the service's fixed models
  and system prompts. Failures raise `AIError`, which carries `status_code`.
- `textforge.cache.TextCache(root)` offers `add`, `get`, `remove` and
  `remove_deprecated`; `Ticker(interval, callback)` and `every_minute(callback)`
  run a callback periodically until `stop()` is called.
- `textforge.handlers.TextService` exposes `transform(params)` and
  `generate(params)`, which return dictionaries or raise `RequestError`.
- `textforge.responses.render(obj, kind, callback)` returns
  `(body, content_type)` for a response type.