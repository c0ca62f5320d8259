from typing import List, Optional

from lark import Lark, Token, Transformer, Tree
from lark.exceptions import UnexpectedInput

from enum_errors import MalformedHeader
from enum_model import EnumDescriptor


# Grammar for the two header line forms the scanner recognises.
# A single line may open several namespaces ("namespace a { namespace b {").
grammar = r"""
    namespace_line: namespace_item+
    ?namespace_item: namespace_open | namespace_alias
    namespace_open: "namespace" scoped_name? LBRACE?
    namespace_alias: "namespace" NAME "=" SCOPE? scoped_name ";"

    enum_line: "enum" enum_scope? NAME? enum_base? LBRACE? ";"?
    enum_scope: CLASS | STRUCT
    enum_base: ":" type_name
    // 'std::uint8_t', '::int32_t', 'unsigned long long'
    type_name: (SCOPE? NAME)+

    scoped_name: NAME (SCOPE NAME)*

    CLASS: "class"
    STRUCT: "struct"
    SCOPE: "::"
    LBRACE: "{"
    NAME: /[A-Za-z_][A-Za-z0-9_]*/

    %import common.WS
    %import common.CPP_COMMENT
    %import common.C_COMMENT
    %ignore WS
    %ignore CPP_COMMENT
    %ignore C_COMMENT
"""

parser = Lark(
    grammar,
    start=['namespace_line', 'enum_line'],
    parser='lalr',
    propagate_positions=True
)


class HeaderLineTransformer(Transformer):
    def scoped_name(self, items):
        return [str(item) for item in items if item.type == 'NAME']

    def namespace_open(self, items):
        for item in items:
            if isinstance(item, list):
                return item
        # anonymous namespace
        return []

    def namespace_alias(self, items):
        # an alias does not open a scope
        return []

    def namespace_line(self, items):
        segments = []
        for item in items:
            segments.extend(item)
        return segments

    def enum_line(self, items):
        name = ""
        is_enum_class = False
        underlying_type = None
        for item in items:
            if isinstance(item, Tree) and item.data == 'enum_scope':
                is_enum_class = True
            elif isinstance(item, Tree) and item.data == 'enum_base':
                underlying_type = _type_text(item.children[0])
            elif isinstance(item, Token) and item.type == 'NAME':
                name = str(item)
        return EnumDescriptor(name, is_enum_class, underlying_type)


def _type_text(type_tree: Tree) -> str:
    """Rebuild the spelling of a base type: no space around '::', one space between words."""
    text = ""
    previous = None
    for token in type_tree.children:
        if previous is not None and previous.type == 'NAME' and token.type == 'NAME':
            text += " "
        text += str(token)
        previous = token
    return text


def _parse(line: str, start: str, source: Optional[str], line_no: Optional[int]):
    try:
        tree = parser.parse(line, start=start)
    except UnexpectedInput as e:
        kind = "namespace" if start == 'namespace_line' else "enum"
        raise MalformedHeader(f"unrecognised {kind} header: {line.strip()!r}", source, line_no) from e
    return HeaderLineTransformer().transform(tree)


def parse_namespace_line(line: str, source: Optional[str] = None, line_no: Optional[int] = None) -> List[str]:
    """Return the namespace segments opened by a 'namespace ...' line, outer to inner."""
    return _parse(line, 'namespace_line', source, line_no)


def parse_enum_line(line: str, source: Optional[str] = None, line_no: Optional[int] = None) -> EnumDescriptor:
    """Return the descriptor for an 'enum ...' header line. The name is empty when the line names no enum."""
    return _parse(line, 'enum_line', source, line_no)
