"""
Caller-facing errors.

Numeric edge cases inside the engine are recovered locally with fallback
values; only caller misuse is raised. Both errors subclass ValueError.
"""


class UnknownIndicatorError(ValueError):
    """Raised when an indicator kind is not one of the supported kinds."""

    def __init__(self, kind: object):
        self.kind = kind
        super().__init__(f"Unknown indicator kind: {kind!r}")


class UnknownStrategyError(ValueError):
    """Raised when a strategy id is not in the strategy catalog."""

    def __init__(self, strategy_id: object):
        self.strategy_id = strategy_id
        super().__init__(f"Unknown strategy id: {strategy_id!r}")
