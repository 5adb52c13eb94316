# src/dcsim_core/validation/issue_codes.py
import logging
from enum import Enum

logger = logging.getLogger(__name__)


class ValidationIssueCode(Enum):
    """
    Registry of result validation issue codes and their message templates.
    Each enum member's value is a tuple: (code_str, message_template_str).
    """

    NOT_SIMULATED = ("NOT_SIMULATED", "Circuit not simulated yet")
    HIGH_CURRENT = ("HIGH_CURRENT", "High current ({current:.3f}A) in {kind} {component_id}")
    POWER_RATING_EXCEEDED = ("POWER_RATING_EXCEEDED", "Power rating exceeded in resistor {component_id}: {power:.3f}W > {rating:g}W")

    @property
    def code(self) -> str:
        return self.value[0]

    @property
    def template(self) -> str:
        return self.value[1]

    def format_message(self, **kwargs) -> str:
        """Formats the message template with provided keyword arguments."""
        try:
            return self.template.format(**kwargs)
        except KeyError as e:
            logger.error(f"Missing key {e} for formatting message template of {self.name}: '{self.template}'. Provided args: {kwargs}")
            return f"Error formatting message for {self.code}: Missing key {e}. Template: '{self.template}' Args: {kwargs}"
