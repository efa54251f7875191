"""
Control-Flow Graph Types
========================

An external parser splits an AVM1 action stream into basic blocks: runs
of actions with a single entry, ending in exactly one flow marker that
says where execution goes next.

    Cfg
    └── CfgBlock (label, actions, flow)
        └── CfgFlow (kind, targets)

The translator only compiles the head block. The remaining blocks are
kept so that callers (and diagnostics) can see what was left out.

Copyright (c) 2025-2026 AVM1 SDK Contributors
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from avm1_sdk.cfg.actions import Action


class FlowKind(Enum):
    """How a basic block hands off control."""
    SIMPLE = "Simple"                    # Fall through / jump to next block
    IF = "If"                            # Conditional branch
    RETURN = "Return"                    # Return from function
    THROW = "Throw"                      # Raise an exception
    TRY = "Try"                          # Enter a try/catch/finally region
    WITH = "With"                        # Enter a with-scope
    WAIT_FOR_FRAME = "WaitForFrame"      # Skip actions unless frame loaded
    WAIT_FOR_FRAME2 = "WaitForFrame2"    # Same, frame number popped off the stack
    ERROR = "Error"                      # Parser could not decode the rest

    @classmethod
    def from_name(cls, name: str) -> "FlowKind":
        """Look up a flow kind by its value ("WaitForFrame") or member name."""
        for kind in cls:
            if name in (kind.value, kind.name):
                return kind
        raise KeyError(name)


@dataclass(frozen=True)
class CfgFlow:
    """
    Terminal flow marker of a block.

    Attributes:
        kind: Flow kind
        targets: Labels of the successor blocks, in the parser's order
    """
    kind: FlowKind
    targets: Tuple[str, ...] = ()

    def __str__(self) -> str:
        if self.targets:
            return f"{self.kind.value} -> {', '.join(self.targets)}"
        return self.kind.value


@dataclass(frozen=True)
class CfgBlock:
    """A basic block: straight-line actions plus the flow marker that ends it."""
    label: str
    actions: Tuple[Action, ...]
    flow: CfgFlow = CfgFlow(FlowKind.SIMPLE)

    def __len__(self) -> int:
        return len(self.actions)


@dataclass(frozen=True)
class Cfg:
    """A parsed action stream, split into basic blocks (head block first)."""
    blocks: Tuple[CfgBlock, ...]

    @property
    def head(self) -> Optional[CfgBlock]:
        """The entry block, or None for an empty graph."""
        return self.blocks[0] if self.blocks else None

    @classmethod
    def single(
        cls,
        actions,
        flow: Optional[CfgFlow] = None,
        label: str = "0",
    ) -> "Cfg":
        """Wrap a straight-line action sequence as a one-block graph."""
        block = CfgBlock(label, tuple(actions), flow or CfgFlow(FlowKind.SIMPLE))
        return cls((block,))
