"""Remote code execution client (Piston API).

Builds one execution request per run, posts it, and reduces the response to
something the code panel can display.

// [LAW:single-enforcer] submit() is the only place exceptions become Failure.
// [LAW:dataflow-not-control-flow] Output text is picked by a fixed
//   stdout -> stderr -> "No output" fallback chain.
"""

from __future__ import annotations

import json
import logging
import urllib.error
import urllib.request
from dataclasses import dataclass, field
from typing import Union

from meetroom.core.languages import RuntimeSpec

logger = logging.getLogger(__name__)

DEFAULT_EXECUTE_URL = "https://emkc.org/api/v2/piston/execute"

COMPILE_TIMEOUT_MS = 10_000
RUN_TIMEOUT_MS = 3_000

NO_CODE_MESSAGE = "No code to run"
NO_OUTPUT = "No output"
UNKNOWN_ERROR = "Unknown error"


class ExecutionProtocolError(Exception):
    """The service answered 2xx with a body we cannot read."""


@dataclass(frozen=True)
class SourceFile:
    name: str
    content: str


@dataclass(frozen=True)
class ExecutionRequest:
    language: str
    version: str
    files: tuple[SourceFile, ...]
    stdin: str = ""
    args: tuple[str, ...] = ()
    compile_timeout: int = COMPILE_TIMEOUT_MS
    run_timeout: int = RUN_TIMEOUT_MS

    def to_payload(self) -> dict:
        return {
            "language": self.language,
            "version": self.version,
            "files": [{"name": f.name, "content": f.content} for f in self.files],
            "stdin": self.stdin,
            "args": list(self.args),
            "compile_timeout": self.compile_timeout,
            "run_timeout": self.run_timeout,
        }


@dataclass(frozen=True)
class Output:
    text: str


@dataclass(frozen=True)
class Failure:
    message: str


ExecutionResult = Union[Output, Failure]


def build_request(runtime: RuntimeSpec, source: str) -> ExecutionRequest:
    """Build the request for a single ``main.<ext>`` file."""
    return ExecutionRequest(
        language=runtime.runtime_id,
        version=runtime.runtime_version,
        files=(SourceFile(name=f"main.{runtime.file_extension}", content=source),),
    )


def _error_message(body: bytes) -> str:
    try:
        parsed = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return UNKNOWN_ERROR
    if not isinstance(parsed, dict):
        return UNKNOWN_ERROR
    return str(parsed.get("message") or UNKNOWN_ERROR)


def reduce_response(status: int, body: bytes) -> ExecutionResult:
    """Turn an HTTP status + body into a display result.

    Raises:
        ExecutionProtocolError: 2xx body is not JSON or has no ``run`` object.
    """
    if not 200 <= status < 300:
        return Failure(f"Failed to execute code: {_error_message(body)}")

    try:
        parsed = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ExecutionProtocolError(f"Malformed response: {exc}") from exc

    run = parsed.get("run") if isinstance(parsed, dict) else None
    if not isinstance(run, dict):
        raise ExecutionProtocolError("Malformed response: missing run result")

    return Output(run.get("stdout") or run.get("stderr") or NO_OUTPUT)


@dataclass
class ExecutionClient:
    """Blocking client for the execution endpoint.

    One call per submit(); the caller keeps calls from overlapping.
    """

    execute_url: str = DEFAULT_EXECUTE_URL
    request_timeout: float | None = None
    headers: dict[str, str] = field(
        default_factory=lambda: {
            "content-type": "application/json",
            "accept": "application/json",
        }
    )

    def _post_json(self, payload: dict) -> tuple[int, bytes]:
        request = urllib.request.Request(
            self.execute_url,
            data=json.dumps(payload).encode("utf-8"),
            headers=dict(self.headers),
            method="POST",
        )
        kwargs = {}
        if self.request_timeout is not None:
            kwargs["timeout"] = self.request_timeout
        try:
            with urllib.request.urlopen(request, **kwargs) as resp:
                return resp.status, resp.read()
        except urllib.error.HTTPError as e:
            # Non-2xx still carries a JSON body with the service's message.
            return e.code, e.read()

    def submit(self, runtime: RuntimeSpec, source: str) -> ExecutionResult:
        if not source.strip():
            return Failure(NO_CODE_MESSAGE)

        request = build_request(runtime, source)
        logger.info(
            "execute_request language=%s version=%s file=%s",
            request.language,
            request.version,
            request.files[0].name,
        )
        try:
            status, body = self._post_json(request.to_payload())
            result = reduce_response(status, body)
        except Exception as exc:
            logger.warning("execute_failed error=%s", exc)
            return Failure(str(exc))

        logger.info("execute_response status=%s result=%s", status, type(result).__name__)
        return result
