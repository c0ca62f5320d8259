"""
C++ generator for enum conversion functions.

For one scanned enum it emits a source file defining, inside the enum's namespaces:

    std::string to_string(E x);
    bool from_string(<string_view> in, E& out);
    bool from_integer(std::underlying_type_t<E> in, E& out);

The text is a pure function of the scan result and the options, so regenerating from
an unchanged header gives a byte-identical file.
"""
from typing import Any, Dict, List

from enum_generators.cpp_generator import CppGeneratorBase
from enum_model import EnumScanResult

# Sentinel returned by to_string for values that are not declared members.
UNKNOWN_VALUE_STRING = "???"

PRESETS: Dict[str, Dict[str, Any]] = {
    'std': {
        'generator_name': 'enum-strings',
        'regenerate_hint': 'Run enum-strings again if this file is out of sync.',
        'prelude_includes': [],
        'push_warnings': None,
        'pop_warnings': None,
        'system_includes': ['<string>', '<string_view>', '<type_traits>'],
        'string_view_type': 'std::string_view',
        'header_extension': '.hpp',
    },
    # Layout used by the CAF build (caf-generate-enum-strings).
    'caf': {
        'generator_name': 'caf-generate-enum-strings',
        'regenerate_hint': 'Run the target update-enum-strings if this file is out of sync.',
        'prelude_includes': ['caf/config.hpp', 'caf/string_view.hpp'],
        'push_warnings': 'CAF_PUSH_DEPRECATED_WARNING',
        'pop_warnings': 'CAF_POP_WARNINGS',
        'system_includes': ['<string>'],
        'string_view_type': 'string_view',
        'header_extension': '.hpp',
    },
}

DEFAULT_PRESET = 'std'


def resolve_options(preset: str = None, overrides: Dict[str, Any] = None) -> Dict[str, Any]:
    """
    Merge a preset with individual overrides. Overrides whose value is None are ignored.
    """
    preset = preset or DEFAULT_PRESET
    if preset not in PRESETS:
        raise ValueError(f"Unknown preset '{preset}' (choose from {', '.join(sorted(PRESETS))})")
    options = dict(PRESETS[preset])
    for key, value in (overrides or {}).items():
        if value is not None:
            options[key] = value
    return options


class CppEnumStringsGenerator(CppGeneratorBase):
    DEFAULT_OPTIONS = PRESETS[DEFAULT_PRESET]

    def __init__(self, scan_result: EnumScanResult, options: Dict[str, Any] = None):
        super().__init__(options)
        self.scan_result = scan_result

    def generate(self, output_name: str) -> Dict[str, str]:
        """
        Returns a dict mapping the output filename to its content.
        """
        return {output_name: self.generate_source()}

    def generate_source(self) -> str:
        result = self.scan_result
        lines: List[str] = []
        lines += self._generate_file_header()
        lines += self._namespace_open_lines(result.namespaces)
        lines.append("")
        lines += self._generate_to_string()
        lines += self._generate_from_string()
        lines += self._generate_from_integer()
        lines += self._namespace_close_lines(result.namespaces)
        if self.option('pop_warnings'):
            lines += ["", self.option('pop_warnings')]
        return "\n".join(lines) + "\n"

    def _generate_file_header(self) -> List[str]:
        lines = [
            "// clang-format off",
            f"// DO NOT EDIT: this file is auto-generated by {self.option('generator_name')}.",
        ]
        if self.option('regenerate_hint'):
            lines.append(f"// {self.option('regenerate_hint')}")
        prelude = self.option('prelude_includes') or []
        if prelude:
            lines += [self._include_line(h) for h in prelude]
            lines.append("")
        if self.option('push_warnings'):
            lines += [self.option('push_warnings'), ""]
        # The enum's own declaration.
        lines.append(self._include_line(self.scan_result.header_path(self.option('header_extension'))))
        lines.append("")
        includes = list(self.option('system_includes') or []) + list(self.option('extra_includes') or [])
        if includes:
            lines += [self._include_line(h) for h in includes]
            lines.append("")
        return lines

    def _generate_to_string(self) -> List[str]:
        name = self.scan_result.enum.name
        lines = [
            f"std::string to_string({name} x) {{",
            "  switch(x) {",
            "    default:",
            f'      return "{UNKNOWN_VALUE_STRING}";',
        ]
        for member in self.scan_result.members:
            lines.append(f"    case {self.scan_result.qualify(member)}:")
            lines.append(f'      return "{member}";')
        lines += ["  };", "}", ""]
        return lines

    def _generate_from_string(self) -> List[str]:
        name = self.scan_result.enum.name
        # if (...) { ... } else if (...) { ... } else { return false; }
        chain = "  "
        for member in self.scan_result.members:
            chain += (
                f'if (in == "{member}") {{\n'
                f"    out = {self.scan_result.qualify(member)};\n"
                "    return true;\n"
                "  } else "
            )
        chain += "{\n    return false;\n  }"
        return [
            f"bool from_string({self.option('string_view_type')} in, {name}& out) {{",
            chain,
            "}",
            "",
        ]

    def _generate_from_integer(self) -> List[str]:
        name = self.scan_result.enum.name
        lines = [
            f"bool from_integer(std::underlying_type_t<{name}> in,",
            f"                  {name}& out) {{",
            f"  auto result = static_cast<{name}>(in);",
            "  switch(result) {",
            "    default:",
            "      return false;",
        ]
        # All member labels share one body.
        for member in self.scan_result.members:
            lines.append(f"  case {self.scan_result.qualify(member)}:")
        lines += [
            "      out = result;",
            "      return true;",
            "  };",
            "}",
            "",
        ]
        return lines
