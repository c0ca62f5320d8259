# cpp_generator.py
"""
Base/shared logic for emitting C++ source text.
Subclasses implement generate_source() for a specific kind of generated file.
"""

from typing import Any, Dict, Iterable, List


class CppGeneratorBase:
    # Values used when neither the caller nor a preset supplies an option.
    DEFAULT_OPTIONS: Dict[str, Any] = {}

    def __init__(self, options: Dict[str, Any] = None):
        self.options = dict(self.DEFAULT_OPTIONS)
        self.options.update({k: v for k, v in (options or {}).items() if v is not None})

    def generate_source(self) -> str:
        """
        Generate the C++ source text.
        """
        raise NotImplementedError("Subclasses must implement generate_source()")

    def option(self, key: str, default: Any = None) -> Any:
        return self.options.get(key, default)

    def _include_line(self, header: str) -> str:
        """
        '#include' directive for a header. Names already written as <...> or "..." are kept,
        bare names are quoted.
        """
        header = header.strip()
        if header.startswith('<') or header.startswith('"'):
            return f"#include {header}"
        return f'#include "{header}"'

    def _namespace_open_lines(self, namespaces: Iterable[str]) -> List[str]:
        return [f"namespace {ns} {{" for ns in namespaces]

    def _namespace_close_lines(self, namespaces: Iterable[str]) -> List[str]:
        # innermost first
        return [f"}} // namespace {ns}" for ns in reversed(list(namespaces))]
