"""One-line summaries of well-known protocol messages.

``METHOD_HANDLERS`` return the suffix appended to the method name and work on
a message's params wherever it appears (top level or nested inside a binding
batch). ``HANDLERS`` return the whole summary for a top-level method.
"""

import json
from typing import Any, Callable


def _obj(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _suffix_target_attached(p: dict) -> str:
    info = _obj(p.get("targetInfo"))
    kind = f" [{info['type']}]" if info.get("type") else ""
    url = f" {info['url']}" if info.get("url") else ""
    return f"{kind}{url}"


def _suffix_target_detached(p: dict) -> str:
    target_id = p.get("targetId")
    return f" {target_id[-4:]}" if isinstance(target_id, str) and target_id else ""


def _suffix_console(p: dict) -> str:
    kind = f" [{p['type']}]" if p.get("type") else ""
    raw_args = p.get("args")
    if not isinstance(raw_args, list):
        raw_args = []
    values = [a.get("value") for a in raw_args if isinstance(a, dict)]
    args = " ".join("" if v is None else _js_str(v) for v in values)
    if len(args) > 50:
        return f"{kind} {args[:50]}..."
    return f"{kind} {args}"


def _suffix_frame_navigated(p: dict) -> str:
    url = _obj(p.get("frame")).get("url")
    return f" {url}" if url else ""


def _suffix_request(p: dict) -> str:
    request = _obj(p.get("request"))
    method = f" {request['method']}" if request.get("method") else ""
    url = f" {request['url']}" if request.get("url") else ""
    return f"{method}{url}"


def _suffix_log_entry(p: dict) -> str:
    entry = _obj(p.get("entry"))
    level = f" [{entry['level']}]" if entry.get("level") else ""
    text = f" {entry['text']}" if entry.get("text") else ""
    return f"{level}{text}"


def _suffix_auto_attach(p: dict) -> str:
    parts = [_js_str(p.get("autoAttach"))]
    if p.get("filter"):
        parts.append("filter")
    return f"({', '.join(parts)})"


def _js_str(value: Any) -> str:
    """String form matching how the viewer prints scalars (true, null, 1)."""
    if value is None:
        return "undefined"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


METHOD_HANDLERS: dict[str, Callable[[dict], str]] = {
    "Target.attachedToTarget": _suffix_target_attached,
    "Target.detachedFromTarget": _suffix_target_detached,
    "Runtime.consoleAPICalled": _suffix_console,
    "Page.frameNavigated": _suffix_frame_navigated,
    "Network.requestWillBeSent": _suffix_request,
    "Log.entryAdded": _suffix_log_entry,
    "Security.setIgnoreCertificateErrors": lambda p: f"({_js_str(p.get('ignore'))})",
    "Target.setDiscoverTargets": lambda p: f"({_js_str(p.get('discover'))})",
    "Target.setAutoAttach": _suffix_auto_attach,
    "Page.lifecycleEvent": lambda p: f"({_js_str(p.get('name'))})",
    "Network.dataReceived": lambda p: f"({_js_str(p.get('dataLength'))})",
    "Page.frameStartedNavigating": (
        lambda p: f"({_js_str(p.get('navigationType'))}, {_js_str(p.get('url'))})"
    ),
    "Network.responseReceived": (
        lambda p: f"({_js_str(p.get('type'))}, {_js_str(_obj(p.get('response')).get('url'))})"
    ),
    "Page.setPrerenderingAllowed": lambda p: f"({_js_str(p.get('isAllowed'))})",
}


def _summarize_message(message: Any) -> str:
    if isinstance(message, str) and message.startswith("{"):
        try:
            message = json.loads(message)
        except (json.JSONDecodeError, RecursionError):
            pass
    if not isinstance(message, dict):
        return ""

    method = message.get("method") or message.get("name") or ""
    params = message.get("params") or {}
    if not isinstance(params, dict):
        params = {}

    if method in METHOD_HANDLERS:
        return f"{method}{METHOD_HANDLERS[method](params)}"

    kind = f" [{params['type']}]" if params.get("type") else ""
    target_id = params.get("targetId")
    tail = f" {target_id[-4:]}" if isinstance(target_id, str) and target_id else ""
    return f"{method}{kind}{tail}" if method else ""


def _summarize_binding(payload: Any) -> str | None:
    if not isinstance(payload, dict):
        return None
    params = payload.get("params") or payload
    if not isinstance(params, dict) or not params.get("name"):
        return None

    inner = params.get("payload")
    if isinstance(inner, str):
        try:
            inner = json.loads(inner)
        except (json.JSONDecodeError, RecursionError):
            inner = None
    if not isinstance(inner, (dict, list)):
        return str(params["name"])

    if isinstance(inner, list):
        messages = inner
    elif isinstance(inner.get("messages"), list):
        messages = inner["messages"]
    else:
        messages = [inner]

    if not messages:
        return str(params["name"])

    summaries = [s for s in (_summarize_message(m) for m in messages) if s]
    if summaries:
        return ", ".join(summaries)

    keys = "Array" if isinstance(inner, list) else ",".join(inner.keys())
    return f"{params['name']}: (No method, keys: {keys})"


def _summarize_windows(payload: Any) -> str | None:
    value = payload.get("value") if isinstance(payload, dict) else None
    if isinstance(value, list):
        return f"Windows: {', '.join(_js_str(v) for v in value)}"
    return None


def _summarize_frame_tree(payload: Any) -> str | None:
    if not isinstance(payload, dict):
        return None
    result = _obj(payload.get("result") or payload)
    url = _obj(_obj(result.get("frameTree")).get("frame")).get("url")
    return f"Top Frame: {url}" if url else None


HANDLERS: dict[str, Callable[[Any], str | None]] = {
    "Runtime.bindingCalled": _summarize_binding,
    "GetWindows": _summarize_windows,
    "Page.getFrameTree": _summarize_frame_tree,
}


def get_inline_summary(method: str | None, payload: Any) -> str | None:
    """Summarize *payload* for *method*, or None if no handler applies."""
    if not method or payload is None:
        return None

    if method in HANDLERS:
        return HANDLERS[method](payload)

    if method in METHOD_HANDLERS:
        params = payload.get("params") if isinstance(payload, dict) else None
        if not isinstance(params, dict):
            params = payload if isinstance(payload, dict) else {}
        return f"{method}{METHOD_HANDLERS[method](params)}"

    return None
