"""
Control-Flow Graph Loader
=========================

Reads a structured block document (JSON) into Cfg objects. This is how
parsed AVM1 code reaches the translator when the parser runs in another
process or another language.

Document Format
---------------
    {
      "blocks": [
        {
          "label": "0",
          "actions": [
            {"action": "ConstantPool", "pool": ["trace"]},
            {"action": "Push", "values": [
                {"type": "String", "value": "hi"},
                {"type": "Sint32", "value": 1},
                {"type": "Constant", "value": 0}
            ]},
            {"action": "CallFunction"},
            {"action": "Pop"}
          ],
          "flow": {"type": "Simple"}
        }
      ]
    }

Action names are matched ignoring case and underscores. Push value types
are Undefined, Null, Boolean, Sint32, Float32, Float64, String, Constant
and Register. A flow may list successor labels under "targets".

Usage Examples
--------------
    >>> from avm1_sdk.cfg import load_cfg_file
    >>> cfg = load_cfg_file("frame1.json")
    >>> print(len(cfg.head.actions))
"""

from pathlib import Path
from typing import Any, Union
import json
import logging

from avm1_sdk.errors import CfgFormatError
from avm1_sdk.cfg.actions import (
    Action,
    ActionCode,
    ConstantPool,
    GetUrl,
    GotoFrame,
    GotoLabel,
    Push,
    PushConstant,
    PushRegister,
    PushValue,
)
from avm1_sdk.cfg.graph import Cfg, CfgBlock, CfgFlow, FlowKind
from avm1_sdk.compiler.values import (
    NULL,
    UNDEFINED,
    Bool,
    Float32,
    Float64,
    Int32,
    INT32_MAX,
    INT32_MIN,
    String,
    to_f32,
)

# Logger for this module
logger = logging.getLogger(__name__)


# =============================================================================
# Field Helpers
# =============================================================================

def _require(obj: dict, key: str, kind: type, path: str) -> Any:
    """Fetch a required key and check its JSON type."""
    if not isinstance(obj, dict):
        raise CfgFormatError("expected an object", path)
    if key not in obj:
        raise CfgFormatError(f"missing '{key}'", path)
    value = obj[key]
    # bool is an int subclass, so integers need the explicit exclusion
    if kind is int and isinstance(value, bool):
        raise CfgFormatError(f"'{key}' must be an integer", path)
    if kind is float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise CfgFormatError(f"'{key}' must be a number", path)
        return float(value)
    if not isinstance(value, kind):
        raise CfgFormatError(f"'{key}' must be of type {kind.__name__}", path)
    return value


def _index(obj: dict, path: str, limit: int) -> int:
    index = _require(obj, "value", int, path)
    if not 0 <= index <= limit:
        raise CfgFormatError(f"index {index} out of range 0..{limit}", path)
    return index


# =============================================================================
# Push Values
# =============================================================================

def push_value_from_dict(obj: dict, path: str = "value") -> PushValue:
    """Decode one push operand."""
    type_name = _require(obj, "type", str, path)

    if type_name == "Undefined":
        return UNDEFINED
    if type_name == "Null":
        return NULL
    if type_name == "Boolean":
        return Bool(_require(obj, "value", bool, path))
    if type_name == "Sint32":
        value = _require(obj, "value", int, path)
        if not INT32_MIN <= value <= INT32_MAX:
            raise CfgFormatError(f"Sint32 value {value} out of range", path)
        return Int32(value)
    if type_name == "Float32":
        value = _require(obj, "value", float, path)
        try:
            return Float32(to_f32(value))
        except OverflowError:
            raise CfgFormatError(f"Float32 value {value} out of range", path) from None
    if type_name == "Float64":
        return Float64(_require(obj, "value", float, path))
    if type_name == "String":
        return String(_require(obj, "value", str, path))
    if type_name == "Constant":
        return PushConstant(_index(obj, path, 0xFFFF))
    if type_name == "Register":
        return PushRegister(_index(obj, path, 0xFF))

    raise CfgFormatError(f"unknown push value type '{type_name}'", path)


# =============================================================================
# Actions
# =============================================================================

def action_from_dict(obj: dict, path: str = "action") -> Action:
    """Decode one action."""
    name = _require(obj, "action", str, path)
    try:
        code = ActionCode.from_name(name)
    except KeyError:
        raise CfgFormatError(f"unknown action '{name}'", path) from None

    if code == ActionCode.GOTO_FRAME:
        return GotoFrame(frame=_require(obj, "frame", int, path))
    if code == ActionCode.GOTO_LABEL:
        return GotoLabel(label=_require(obj, "label", str, path))
    if code == ActionCode.GET_URL:
        return GetUrl(
            url=_require(obj, "url", str, path),
            target=_require(obj, "target", str, path),
        )
    if code == ActionCode.CONSTANT_POOL:
        pool = _require(obj, "pool", list, path)
        for i, entry in enumerate(pool):
            if not isinstance(entry, str):
                raise CfgFormatError("constant pool entries must be strings", f"{path}.pool[{i}]")
        return ConstantPool(pool=tuple(pool))
    if code == ActionCode.PUSH:
        values = _require(obj, "values", list, path)
        return Push(values=tuple(
            push_value_from_dict(v, f"{path}.values[{i}]")
            for i, v in enumerate(values)
        ))

    # Payload of other actions is not modelled; the translator stops at them
    return Action(code)


# =============================================================================
# Blocks and Graphs
# =============================================================================

def flow_from_dict(obj: dict, path: str = "flow") -> CfgFlow:
    """Decode a block's terminal flow marker."""
    type_name = _require(obj, "type", str, path)
    try:
        kind = FlowKind.from_name(type_name)
    except KeyError:
        raise CfgFormatError(f"unknown flow type '{type_name}'", path) from None

    targets = obj.get("targets", [])
    if not isinstance(targets, list) or not all(isinstance(t, str) for t in targets):
        raise CfgFormatError("'targets' must be a list of labels", path)
    return CfgFlow(kind, tuple(targets))


def block_from_dict(obj: dict, path: str = "block") -> CfgBlock:
    """Decode one basic block."""
    label = obj.get("label", "") if isinstance(obj, dict) else ""
    if not isinstance(label, str):
        raise CfgFormatError("'label' must be a string", path)

    actions = _require(obj, "actions", list, path)
    flow = obj.get("flow")
    return CfgBlock(
        label=label,
        actions=tuple(
            action_from_dict(a, f"{path}.actions[{i}]")
            for i, a in enumerate(actions)
        ),
        flow=flow_from_dict(flow, f"{path}.flow") if flow is not None else CfgFlow(FlowKind.SIMPLE),
    )


def cfg_from_dict(obj: dict) -> Cfg:
    """
    Decode a whole control-flow graph document.

    Raises:
        CfgFormatError: If the document is malformed
    """
    blocks = _require(obj, "blocks", list, "cfg")
    cfg = Cfg(tuple(
        block_from_dict(b, f"blocks[{i}]") for i, b in enumerate(blocks)
    ))
    logger.debug(f"Loaded CFG with {len(cfg.blocks)} block(s)")
    return cfg


def cfg_from_json(text: str) -> Cfg:
    """Decode a control-flow graph from JSON text."""
    try:
        obj = json.loads(text)
    except json.JSONDecodeError as e:
        raise CfgFormatError(f"invalid JSON: {e}") from e
    return cfg_from_dict(obj)


def load_cfg_file(filepath: Union[str, Path]) -> Cfg:
    """
    Read and decode a control-flow graph document from disk.

    Raises:
        FileNotFoundError: If the file doesn't exist
        CfgFormatError: If the document is malformed or not UTF-8
    """
    filepath = Path(filepath)
    try:
        text = filepath.read_bytes().decode("utf-8")
    except UnicodeDecodeError as e:
        raise CfgFormatError(f"invalid UTF-8: {e}", str(filepath)) from e
    try:
        return cfg_from_json(text)
    except CfgFormatError as e:
        raise CfgFormatError(e.message, f"{filepath}: {e.path}" if e.path else str(filepath)) from e
