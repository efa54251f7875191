"""
AVM1 SDK Control-Flow Graph Module
==================================

Structured input for the translator: AVM1 actions grouped into basic
blocks, as handed over by an external bytecode parser.

Usage:
    from avm1_sdk.cfg import load_cfg_file

    cfg = load_cfg_file("frame1.json")
    for action in cfg.head.actions:
        print(action)

Copyright (c) 2025-2026 AVM1 SDK Contributors
"""

from .actions import (
    ActionCode,
    Action,
    GotoFrame,
    GotoLabel,
    GetUrl,
    ConstantPool,
    Push,
    PushConstant,
    PushRegister,
)
from .graph import FlowKind, CfgFlow, CfgBlock, Cfg
from .loader import cfg_from_dict, cfg_from_json, load_cfg_file

__all__ = [
    "ActionCode",
    "Action",
    "GotoFrame",
    "GotoLabel",
    "GetUrl",
    "ConstantPool",
    "Push",
    "PushConstant",
    "PushRegister",
    "FlowKind",
    "CfgFlow",
    "CfgBlock",
    "Cfg",
    "cfg_from_dict",
    "cfg_from_json",
    "load_cfg_file",
]
