"""Chat completion client used to transform and generate texts."""

from __future__ import annotations

import httpx

DEFAULT_BASE_URL = "https://api.openai.com/v1"
TRANSFORM_MODEL = "gpt-4"
GENERATE_MODEL = "gpt-4o"
TRANSFORM_PROMPT = (
    "Сделай только то что тебя просят и не больше. В ответе должно быть только то о чём "
    "попросили, без пояснений, лишних кавычек и т.д. Внимательно следуй инструкциям."
)
GENERATE_PROMPT = (
    "Provide only the answer itself, without adding comments. "
    "Do only what is asked and nothing more."
)


class AIError(Exception):
    """Raised when the completion service fails or answers unexpectedly."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ChatClient:
    """Minimal client for a chat completions endpoint."""

    def __init__(self, api_key: str, base_url: str = DEFAULT_BASE_URL, http_client=None):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self._http = http_client if http_client is not None else httpx.Client(timeout=None)

    def complete(self, model: str, system_prompt: str, text: str) -> str:
        """Send one system and one user message and return the first answer."""
        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": text},
        ]
        try:
            response = self._http.post(
                f"{self.base_url}/chat/completions",
                json={"model": model, "messages": messages},
                headers={"Authorization": f"Bearer {self.api_key}"},
            )
        except httpx.HTTPError as exc:
            raise AIError(str(exc)) from exc

        status = response.status_code
        if status >= 400:
            try:
                message = response.json()["error"]["message"]
            except (ValueError, KeyError, TypeError):
                message = response.text
            raise AIError(f"error, status code: {status}, message: {message}", status)
        try:
            return response.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            raise AIError(f"malformed completion response: {exc}", status) from exc

    def transform(self, text: str) -> str:
        return self.complete(TRANSFORM_MODEL, TRANSFORM_PROMPT, text)

    def generate(self, text: str) -> str:
        return self.complete(GENERATE_MODEL, GENERATE_PROMPT, text)