from .environment import (
    EnvironmentVariable,
    EnvVarAction,
    EnvVarPart,
    expand_environment_variable,
    expand_environment_variables,
)
from .version import parse_version, read_version, require_version

__all__ = [
    "EnvironmentVariable",
    "EnvVarAction",
    "EnvVarPart",
    "expand_environment_variable",
    "expand_environment_variables",
    "parse_version",
    "read_version",
    "require_version",
]
