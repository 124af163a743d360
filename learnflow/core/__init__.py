"""コア定義.

モジュール:
- constants: 列挙型と定数
- exceptions: 例外階層
"""

from learnflow.core.exceptions import (
    AccessDeniedError,
    AssemblerValidationError,
    ConfigurationError,
    ControllerError,
    LearnFlowError,
)


__all__ = [
    "AccessDeniedError",
    "AssemblerValidationError",
    "ConfigurationError",
    "ControllerError",
    "LearnFlowError",
]
