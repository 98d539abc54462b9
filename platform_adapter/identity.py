"""
Module identity model.
Uses Pydantic for validation and immutability.
"""

import sys

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field


class ModuleIdentity(BaseModel):
    """Full identity of a module that declares or implements a contract.

    The name is the dotted import name. The version is an optional qualifier
    taken from the declaring module's ``__version__``; loaders may insist on it,
    which is why the resolver can retry with a relaxed identity.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Dotted module name")
    version: str | None = Field(default=None, description="Version qualifier, if known")

    def __str__(self) -> str:
        if self.version:
            return f"{self.name}=={self.version}"
        return self.name

    @classmethod
    def of(cls, contract: type) -> "ModuleIdentity":
        """Identity of the module declaring ``contract``."""
        module_name = contract.__module__
        module = sys.modules.get(module_name)
        version = getattr(module, "__version__", None) if module is not None else None
        return cls(name=module_name, version=str(version) if version else None)

    @property
    def is_relaxed(self) -> bool:
        """True when no qualifier is left to strip."""
        return self.version is None

    def relaxed(self) -> "ModuleIdentity":
        """Same module name with every qualifier stripped."""
        return self.model_copy(update={"version": None})

    def with_name(self, name: str) -> "ModuleIdentity":
        """Same qualifiers, different module name."""
        return self.model_copy(update={"name": name})
