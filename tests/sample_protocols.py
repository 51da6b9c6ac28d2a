"""Protocol documents shared by the test modules."""

from __future__ import annotations

import copy
from typing import Any


def _prop(name: str, type_: str | None = None, *, ref: str | None = None, **extra: Any) -> dict[str, Any]:
    prop: dict[str, Any] = {"name": name, "description": f"The {name} property."}
    if ref is not None:
        prop["$ref"] = ref
    else:
        prop["type"] = type_
    prop.update(extra)
    return prop


CONSOLE = {
    "domain": "Console",
    "description": "Console messages.",
    "types": [
        {
            "id": "Message",
            "type": "object",
            "description": "Console message.",
            "properties": [
                _prop("source", "string"),
                _prop("level", "string", enum=["log", "warning", "error"]),
                _prop("text", "string"),
                _prop("url", "string", optional=True),
                _prop("line", "integer", optional=True),
                _prop("column", "integer", optional=True),
            ],
        }
    ],
    "commands": [{"name": "clearMessages", "description": "Clears console messages."}],
    "events": [
        {
            "name": "messageAdded",
            "description": "Issued when a new message was logged.",
            "parameters": [_prop("message", ref="Message")],
        }
    ],
}

NETWORK = {
    "domain": "Network",
    "types": [
        {"id": "LoaderId", "type": "string", "description": "Unique loader identifier."},
        {"id": "ResourceType", "type": "string", "enum": ["Document", "Script", "XHR"]},
        {"id": "Headers", "type": "object", "description": "Request / response headers."},
        {
            "id": "Request",
            "type": "object",
            "properties": [
                _prop("url", "string"),
                _prop("method", "string"),
                _prop("headers", ref="Headers"),
                _prop("type", ref="ResourceType", optional=True),
                _prop("postData", "string", optional=True),
                _prop("tags", "array", items={"type": "string"}, optional=True),
            ],
        },
    ],
    "events": [
        {
            "name": "requestWillBeSent",
            "parameters": [
                _prop("requestId", "string"),
                _prop("loaderId", ref="LoaderId"),
                _prop("request", ref="Request"),
                _prop("type", ref="ResourceType", optional=True),
            ],
        }
    ],
}

PAGE = {
    "domain": "Page",
    "description": "Actions and events related to the inspected page.",
    "types": [
        {"id": "FrameId", "type": "string", "description": "Unique frame identifier."},
        {
            "id": "Frame",
            "type": "object",
            "description": "Information about the Frame on the page.",
            "properties": [
                _prop("id", ref="FrameId"),
                _prop("loaderId", ref="Network.LoaderId"),
                _prop("url", "string"),
                _prop("parentId", ref="FrameId", optional=True),
            ],
        },
    ],
    "commands": [
        {
            "name": "enable",
            "description": "Enables page domain notifications.",
        },
        {
            "name": "reload",
            "description": "Reloads given page optionally ignoring the cache.",
            "parameters": [
                _prop("ignoreCache", "boolean", optional=True),
                _prop("scriptToEvaluateOnLoad", "string", optional=True),
            ],
        },
        {
            "name": "navigate",
            "description": "Navigates current page to the given URL.",
            "parameters": [
                _prop("url", "string"),
                _prop("referrer", "string", optional=True),
            ],
            "returns": [
                _prop("frameId", ref="FrameId"),
                _prop("loaderId", ref="Network.LoaderId", optional=True),
                _prop("errorText", "string", optional=True),
            ],
        },
        {
            "name": "getFrameTree",
            "experimental": True,
            "returns": [_prop("frame", ref="Frame")],
        },
    ],
    "events": [
        {"name": "loadEventFired", "parameters": [_prop("timestamp", "number")]},
        {"name": "frameNavigated", "parameters": [_prop("frame", ref="Frame")]},
    ],
}

DOM = {
    "domain": "DOM",
    "experimental": True,
    "types": [
        {"id": "NodeId", "type": "integer", "description": "Unique DOM node identifier."},
        {"id": "Quad", "type": "array", "items": {"type": "number"}},
        {"id": "Quads", "type": "array", "items": {"$ref": "Quad"}},
        {
            "id": "TreeNode",
            "type": "object",
            "properties": [_prop("next", ref="TreeNode")],
        },
        {
            "id": "Node",
            "type": "object",
            "properties": [
                _prop("nodeId", ref="NodeId"),
                _prop("frameId", ref="Page.FrameId", optional=True),
                _prop("children", "array", items={"$ref": "Node"}, optional=True),
                _prop("attributes", "object", optional=True),
                _prop("value", "any", optional=True),
            ],
        },
    ],
    "commands": [
        {
            "name": "getDocument",
            "returns": [_prop("root", ref="Node")],
        }
    ],
    "events": [{"name": "treeUpdated", "parameters": [_prop("tree", ref="TreeNode")]}],
}


def document(*domains: dict[str, Any]) -> dict[str, Any]:
    return {"version": {"major": "1", "minor": "3"}, "domains": copy.deepcopy(list(domains))}


def full_document() -> dict[str, Any]:
    return document(PAGE, NETWORK, DOM, CONSOLE)
