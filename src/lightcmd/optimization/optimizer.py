"""
Merging of selection and property commands.

A selection followed by property-setting commands is folded into a single
command, e.g. `["Select Fixture 1", "At 50", "Color Red"]` becomes
`["Fixture 1 At 50 Color Red"]`. This assumes the host applies trailing
property clauses to the selection that precedes them.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from functools import reduce

from lightcmd.config import DEFAULT_GRAMMAR, GrammarConfig


@dataclass(frozen=True)
class OptimizerState:
    """
    Running state of one optimization pass.

    Params:
        output: Commands emitted so far
        current_selection: Selection text after the selection keyword, if any
        pending_properties: Property commands waiting for the selection
    """

    output: tuple[str, ...] = ()
    current_selection: str | None = None
    pending_properties: tuple[str, ...] = field(default=())


class SequenceOptimizer:
    """Folds selection and property commands into fewer commands."""

    def __init__(self, grammar: GrammarConfig | None = None):
        self.grammar = grammar or DEFAULT_GRAMMAR
        self._select_prefix = f"{self.grammar.selection_keyword} "

    def optimize(self, commands: Iterable[str]) -> list[str]:
        """
        Optimize a command sequence.

        Program order is preserved. Commands are trimmed and empty commands
        are dropped. A selection with no following property commands is kept
        as a plain selection command.

        Params:
            commands: Command strings in execution order

        Returns:
            Optimized command strings
        """
        state = reduce(self._step, commands, OptimizerState())
        return list(self._flush(state).output)

    def _is_property(self, command: str) -> bool:
        first, _, rest = command.partition(" ")
        return bool(rest.strip()) and first in self.grammar.clause_keywords

    def _opens_selection(self, selection: str) -> bool:
        # a merged "<selection> <properties>" must not read back as a property command
        return bool(selection) and selection.split()[0] not in self.grammar.clause_keywords

    def _flush(self, state: OptimizerState) -> OptimizerState:
        if state.current_selection is None:
            return state
        if state.pending_properties:
            merged = " ".join((state.current_selection,) + state.pending_properties)
        else:
            merged = self._select_prefix + state.current_selection
        return OptimizerState(output=state.output + (merged,))

    def _step(self, state: OptimizerState, command: str) -> OptimizerState:
        command = command.strip()
        if not command:
            return state

        if command.startswith(self._select_prefix):
            selection = command[len(self._select_prefix) :].strip()
            if self._opens_selection(selection):
                return replace(self._flush(state), current_selection=selection)

        if self._is_property(command):
            if state.current_selection is None:
                return replace(state, output=state.output + (command,))
            return replace(
                state, pending_properties=state.pending_properties + (command,)
            )

        flushed = self._flush(state)
        return replace(flushed, output=flushed.output + (command,))


def optimize(
    commands: Iterable[str], grammar: GrammarConfig | None = None
) -> list[str]:
    """
    Optimize a command sequence.

    Convenience wrapper around `SequenceOptimizer.optimize`.

    Params:
        commands: Command strings in execution order
        grammar: Grammar supplying the selection and property keywords

    Returns:
        Optimized command strings
    """
    return SequenceOptimizer(grammar).optimize(commands)
