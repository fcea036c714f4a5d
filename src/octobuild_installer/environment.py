"""
Environment variable declarations for the installer.

Windows Installer writes machine-wide variables under HKLM and per-user
variables under HKCU, and a package installed with ALLUSERS unset must not
touch HKLM. Every variable is therefore declared twice, once per install
scope, each copy guarded by a condition that is true in exactly one scope:

    declared = [EnvironmentVariable(feature, "PATH", "[APPLICATIONFOLDER]", part=EnvVarPart.LAST)]
    entries = expand_environment_variables(declared)   # -> 2 declarations
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from .model import Feature

MACHINE_CONDITION = "ALLUSERS"
USER_CONDITION = "NOT ALLUSERS"


class EnvVarPart(Enum):
    FIRST = "first"
    LAST = "last"
    ALL = "all"


class EnvVarAction(Enum):
    SET = "set"
    CREATE = "create"
    REMOVE = "remove"


@dataclass(frozen=True)
class EnvironmentVariable:
    """
    One environment variable entry.

    Attributes:
        feature: Feature the entry is installed with.
        name: Variable name, e.g. ``PATH``.
        value: Formatted value, e.g. ``[APPLICATIONFOLDER]``.
        permanent: Keep the value on uninstall.
        part: Where the value goes in an existing list-valued variable.
        action: What the installer does with the variable.
        system: True for the machine-wide copy, False for the per-user one.
        condition: Install-scope guard; None until the entry is expanded.
    """
    feature: Optional[Feature]
    name: str
    value: str
    permanent: bool = False
    part: EnvVarPart = EnvVarPart.ALL
    action: EnvVarAction = EnvVarAction.SET
    system: bool = False
    condition: Optional[str] = None


def expand_environment_variable(
        variable: EnvironmentVariable,
) -> Tuple[EnvironmentVariable, EnvironmentVariable]:
    """Return the (machine-wide, per-user) pair for one logical variable."""
    return (
        replace(variable, system=True, condition=MACHINE_CONDITION),
        replace(variable, system=False, condition=USER_CONDITION),
    )


def expand_environment_variables(
        variables: Iterable[EnvironmentVariable],
) -> List[EnvironmentVariable]:
    expanded: List[EnvironmentVariable] = []
    for variable in variables:
        expanded.extend(expand_environment_variable(variable))
    return expanded
