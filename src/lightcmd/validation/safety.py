"""
Classification of destructive console commands.

The classifier matches a command's leading verb against the ordered
destructive-command table of the grammar. It never blocks anything; the
dispatcher uses the classification to decide whether confirmation is needed.
"""

from attrs import frozen

from lightcmd.config import DEFAULT_GRAMMAR, GrammarConfig
from lightcmd.core.enums import SeverityLevel


@frozen
class SafetyClassification:
    """
    Result of classifying a command.

    Params:
        destructive: True when the command can lose data or output
        reason: What would be lost, empty when not destructive
        severity: How severe the loss would be
    """

    destructive: bool
    reason: str
    severity: SeverityLevel

    @property
    def label(self) -> str:
        """Message prefix matching the severity."""
        if self.severity is SeverityLevel.CRITICAL:
            return "CRITICAL"
        if self.severity is SeverityLevel.HIGH:
            return "WARNING"
        return "Notice"


NOT_DESTRUCTIVE = SafetyClassification(False, "", SeverityLevel.LOW)


def classify(
    command: str | None, grammar: GrammarConfig | None = None
) -> SafetyClassification:
    """
    Classify a command as destructive or not.

    Rules are checked in table order, most critical first, and the first
    matching rule wins. Matching is case-insensitive.

    Params:
        command: Command string
        grammar: Grammar supplying the destructive rules

    Returns:
        SafetyClassification
    """
    if not command:
        return NOT_DESTRUCTIVE
    grammar = grammar or DEFAULT_GRAMMAR
    for rule in grammar.destructive_rules:
        if rule.matches(command):
            return SafetyClassification(True, rule.reason, rule.severity)
    return NOT_DESTRUCTIVE


def requires_confirmation(
    classification: SafetyClassification,
    threshold: SeverityLevel = SeverityLevel.LOW,
) -> bool:
    """Whether a classification reaches the confirmation threshold."""
    return classification.destructive and classification.severity >= threshold
