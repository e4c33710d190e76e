"""engine.errors"""

from __future__ import annotations


class ValidationError(ValueError):
    """Invalid player input or an action outside its valid state.

    The message is player-facing. Raising it means no state was changed.
    """
