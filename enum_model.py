"""
enum_model.py
The values produced by the scanner and consumed by the code generator: the enclosing
namespace path, the enum header and the ordered list of enumerator names.
"""
from typing import Iterable, Optional, Tuple


class EnumDescriptor:
    def __init__(self, name: str, is_enum_class: bool = False, underlying_type: Optional[str] = None):
        self.name: str = name
        self.is_enum_class: bool = is_enum_class
        self.underlying_type: Optional[str] = underlying_type # raw text after ':', e.g. 'std::uint8_t'

    def __eq__(self, other):
        if not isinstance(other, EnumDescriptor):
            return NotImplemented
        return (self.name, self.is_enum_class, self.underlying_type) == \
            (other.name, other.is_enum_class, other.underlying_type)

    def __hash__(self):
        return hash((self.name, self.is_enum_class, self.underlying_type))

    def __repr__(self):
        kind = "enum class" if self.is_enum_class else "enum"
        if self.underlying_type:
            return f"EnumDescriptor({kind} {self.name} : {self.underlying_type})"
        return f"EnumDescriptor({kind} {self.name})"


class EnumScanResult:
    def __init__(self, namespaces: Iterable[str], enum: EnumDescriptor, members: Iterable[str]):
        self.namespaces: Tuple[str, ...] = tuple(namespaces) # outer to inner
        self.enum: EnumDescriptor = enum
        self.members: Tuple[str, ...] = tuple(members) # declaration order

    @property
    def qualified_prefix(self) -> str:
        """Prefix for case labels and assigned constants: 'Name::' for scoped enums only."""
        if self.enum.is_enum_class:
            return self.enum.name + "::"
        return ""

    def qualify(self, member: str) -> str:
        return self.qualified_prefix + member

    def header_path(self, extension: str = ".hpp") -> str:
        """Relative path of the header declaring the enum, e.g. 'caf/detail/Color.hpp'."""
        return "/".join(self.namespaces + (self.enum.name + extension,))

    def __repr__(self):
        return f"EnumScanResult(namespaces={list(self.namespaces)}, enum={self.enum!r}, members={list(self.members)})"
