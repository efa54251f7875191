"""
Block Translator
================

Turns one basic block of AVM1 actions into a flat op sequence by
symbolically executing it: every action updates the compile-time stack,
pure pushes fold straight into operands, and each observable side effect
becomes one op.

Translation Rules
-----------------
    Play / Stop                 -> play / stop
    GotoFrame n                 -> gotoframe n
    GotoLabel s                 -> gotolabel s
    GetUrl url, target          -> geturl url, target
    ConstantPool [...]          replaces the constant pool
    Push v...                   pushes literals; constants and registers
                                resolve immediately
    Pop                         drops the top value
    GetVariable   (name)        -> getvar name
    SetVariable   (name, value) -> setvar name, value
    CallFunction  (args..., n, name)
                                -> getvar name ; call %k(args)
    CallMethod    (args..., n, receiver, name)
                                -> callmethod receiver.name(args)
                                   or call receiver(args) for "" / undefined

Operands in parentheses are listed deepest first, so `name` is popped
first. Call arguments are collected in pop order: the last argument
pushed is the first one in the op.

Bail-Out Policy
---------------
When an operand has a shape the rule cannot use (a computed variable
name, a non-integer argument count, an action with no rule) translation
stops at that action. The ops emitted so far are returned unchanged and
Code.bailout says where and why. Nothing after the failing action is
translated.

Malformed input (stack underflow, bad constant or register index) is not
a bail-out: it raises a MalformedInputError subclass.

Example:
    >>> from avm1_sdk.cfg import Cfg, Push, Action, ActionCode
    >>> from avm1_sdk.compiler.values import Int32, String
    >>> cfg = Cfg.single([
    ...     Push(values=(Int32(1), Int32(2), Int32(2), String("f"))),
    ...     Action(ActionCode.CALL_FUNCTION),
    ... ])
    >>> print(compile_cfg(cfg).to_text())
    %0 = getvar "f"
    %1 = call %0(2, 1)

Copyright (c) 2025-2026 AVM1 SDK Contributors
"""

from typing import Callable, Dict, Optional, Type, TypeVar
import logging

from avm1_sdk.config import TranslatorConfig
from avm1_sdk.errors import (
    InvalidPushValueError,
    MalformedInputError,
    StackUnderflowError,
    TooDynamicError,
)
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
)
from avm1_sdk.cfg.graph import Cfg, CfgBlock, CfgFlow, FlowKind
from avm1_sdk.compiler import ops
from avm1_sdk.compiler.ops import BailOut, Code
from avm1_sdk.compiler.stack import MachineState
from avm1_sdk.compiler.values import UNDEFINED, OpResult, Undefined, Value

# Logger for this module
logger = logging.getLogger(__name__)

A = TypeVar("A", bound=Action)

# A rule returns None to continue, or the reason translation must stop
Rule = Callable[[MachineState, Action], Optional[str]]


class Translator:
    """
    Symbolic translator for a single AVM1 basic block.

    The translator itself holds only configuration; all machine state is
    created per call to translate(), so one instance can be reused (and
    shared between threads) freely.

    Usage:
        translator = Translator()
        code = translator.translate(cfg.head)
        for op in code:
            print(op)
    """

    def __init__(self, config: Optional[TranslatorConfig] = None):
        self.config = config or TranslatorConfig()
        self._rules: Dict[ActionCode, Rule] = {
            ActionCode.PLAY: self._play,
            ActionCode.STOP: self._stop,
            ActionCode.GOTO_FRAME: self._goto_frame,
            ActionCode.GOTO_LABEL: self._goto_label,
            ActionCode.GET_URL: self._get_url,
            ActionCode.CONSTANT_POOL: self._constant_pool,
            ActionCode.PUSH: self._push,
            ActionCode.POP: self._pop,
            ActionCode.GET_VARIABLE: self._get_variable,
            ActionCode.SET_VARIABLE: self._set_variable,
            ActionCode.CALL_FUNCTION: self._call_function,
            ActionCode.CALL_METHOD: self._call_method,
        }

    @property
    def supported_actions(self):
        """Action codes that have a translation rule."""
        return frozenset(self._rules)

    # =========================================================================
    # Entry Point
    # =========================================================================

    def translate(self, block: CfgBlock) -> Code:
        """
        Translate one basic block.

        Args:
            block: The block to translate

        Returns:
            Code holding the emitted ops, with `bailout` set if
            translation stopped before the last action

        Raises:
            MalformedInputError: If the block's stack usage or indices are invalid
            TooDynamicError: In strict mode, instead of bailing out
        """
        state = MachineState()
        bailout = None

        for index, action in enumerate(block.actions):
            state.action_index = index
            state.action_name = action.name

            rule = self._rules.get(action.code)
            if rule is None:
                reason = "unsupported action"
            else:
                try:
                    reason = rule(state, action)
                except StackUnderflowError:
                    raise StackUnderflowError(index, action.name) from None

            if reason is not None:
                bailout = BailOut(index, action.name, reason)
                logger.info(f"Translation stopped at {bailout}")
                if self.config.strict:
                    raise TooDynamicError(reason, index, action.name)
                break

        state.action_index = None
        state.action_name = None
        self._finish_flow(state, block.flow)

        return Code(state.emitter.ops(), bailout)

    # =========================================================================
    # Flow Epilogue
    # =========================================================================

    def _finish_flow(self, state: MachineState, flow: CfgFlow) -> None:
        if flow.kind == FlowKind.WAIT_FOR_FRAME:
            # Frames are all loaded up front, nothing to wait for
            return
        if flow.kind == FlowKind.WAIT_FOR_FRAME2:
            # The frame operand is still on the stack
            state.stack.discard()
            return
        logger.info(f"Unhandled block flow: {flow}")

    # =========================================================================
    # Helpers
    # =========================================================================

    @staticmethod
    def _payload(state: MachineState, action: Action, kind: Type[A]) -> A:
        """Check an action carries the payload its code requires."""
        if not isinstance(action, kind):
            raise MalformedInputError(
                f"action has no {kind.__name__} payload",
                state.action_index, state.action_name,
            )
        return action

    @staticmethod
    def _too_dynamic(what: str, *values: Value) -> str:
        return f"too dynamic {what}(" + ", ".join(str(v) for v in values) + ")"

    # =========================================================================
    # Timeline Rules
    # =========================================================================

    def _play(self, state: MachineState, action: Action) -> Optional[str]:
        state.emitter.emit(ops.Play())
        return None

    def _stop(self, state: MachineState, action: Action) -> Optional[str]:
        state.emitter.emit(ops.Stop())
        return None

    def _goto_frame(self, state: MachineState, action: Action) -> Optional[str]:
        goto = self._payload(state, action, GotoFrame)
        # Frame numbers are 16-bit on the timeline
        state.emitter.emit(ops.GotoFrame(goto.frame & 0xFFFF))
        return None

    def _goto_label(self, state: MachineState, action: Action) -> Optional[str]:
        goto = self._payload(state, action, GotoLabel)
        state.emitter.emit(ops.GotoLabel(goto.label))
        return None

    def _get_url(self, state: MachineState, action: Action) -> Optional[str]:
        get_url = self._payload(state, action, GetUrl)
        state.emitter.emit(ops.GetUrl(get_url.url, get_url.target))
        return None

    # =========================================================================
    # Stack Rules
    # =========================================================================

    def _constant_pool(self, state: MachineState, action: Action) -> Optional[str]:
        pool = self._payload(state, action, ConstantPool)
        state.constants = tuple(pool.pool)
        return None

    def _push(self, state: MachineState, action: Action) -> Optional[str]:
        push = self._payload(state, action, Push)
        for value in push.values:
            if isinstance(value, PushConstant):
                state.stack.push(state.constant(value.index))
            elif isinstance(value, PushRegister):
                state.stack.push(state.register(value.index))
            elif isinstance(value, Value) and not isinstance(value, OpResult):
                state.stack.push(value)
            else:
                raise InvalidPushValueError(
                    f"cannot push {value!r}",
                    state.action_index, state.action_name,
                )
        return None

    def _pop(self, state: MachineState, action: Action) -> Optional[str]:
        state.stack.discard()
        return None

    # =========================================================================
    # Variable Rules
    # =========================================================================

    def _get_variable(self, state: MachineState, action: Action) -> Optional[str]:
        name = state.stack.pop()
        if name.as_str() is None:
            return self._too_dynamic("GetVar", name)
        state.stack.push(state.emitter.emit(ops.GetVar(name.as_str())))
        return None

    def _set_variable(self, state: MachineState, action: Action) -> Optional[str]:
        value = state.stack.pop()
        name = state.stack.pop()
        if name.as_str() is None:
            return self._too_dynamic("SetVar", name, value)
        state.stack.push(state.emitter.emit(ops.SetVar(name.as_str(), value)))
        return None

    # =========================================================================
    # Call Rules
    # =========================================================================

    def _call_function(self, state: MachineState, action: Action) -> Optional[str]:
        name = state.stack.pop()
        arg_count = state.stack.pop()
        count = arg_count.as_i32()
        if name.as_str() is None or count is None:
            return self._too_dynamic("CallFunction", name, arg_count)

        args = state.stack.pop_many(count)
        callee = state.emitter.emit(ops.GetVar(name.as_str()))
        state.stack.push(state.emitter.emit(ops.Call(callee, args)))
        return None

    def _call_method(self, state: MachineState, action: Action) -> Optional[str]:
        name = state.stack.pop()
        receiver = state.stack.pop()
        arg_count = state.stack.pop()

        # An empty method name means "call the receiver itself"
        if name.as_str() == "":
            name = UNDEFINED

        count = arg_count.as_i32()
        if count is None:
            return self._too_dynamic("CallMethod", name, arg_count)

        if isinstance(name, Undefined):
            args = state.stack.pop_many(count)
            result = state.emitter.emit(ops.Call(receiver, args))
        elif name.as_str() is not None:
            args = state.stack.pop_many(count)
            result = state.emitter.emit(ops.CallMethod(receiver, name.as_str(), args))
        else:
            return self._too_dynamic("CallMethod", name, arg_count)

        state.stack.push(result)
        return None


# =============================================================================
# Convenience Functions
# =============================================================================

def compile_block(block: CfgBlock, config: Optional[TranslatorConfig] = None) -> Code:
    """Translate a single basic block with a fresh translator."""
    return Translator(config).translate(block)


def compile_cfg(cfg: Cfg, config: Optional[TranslatorConfig] = None) -> Code:
    """
    Translate the head block of a control-flow graph.

    Only the head block is translated; linking blocks together is not
    supported, so any further blocks are reported and skipped.

    Raises:
        MalformedInputError: If the graph has no blocks
    """
    config = config or TranslatorConfig()
    head = cfg.head
    if head is None:
        raise MalformedInputError("control-flow graph has no blocks")

    skipped = len(cfg.blocks) - 1
    if skipped and config.warn_extra_blocks:
        logger.warning(
            f"Only the head block '{head.label}' is translated; "
            f"{skipped} further block(s) skipped"
        )

    return Translator(config).translate(head)
