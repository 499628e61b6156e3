"""Java syntax tree access for the unused-import rule.

The tree itself comes from ``javalang``. This module reduces it to what the
rule needs: the ordered import declarations and the set of names the file
references.

A name counts as used when it appears as

* an identifier expression (``value``) or the leading segment of a qualifier
  (``List.of(...)``, ``System.out``),
* the declared type of a method or constructor parameter,
* a declared thrown exception type,
* a caught exception type, including every alternative of a multi-catch.

Annotations, generic type arguments, field and local-variable types and
``new`` expressions are deliberately not counted.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import FrozenSet, Iterable, Optional, Set, Tuple

from javalang import parse as java_parse
from javalang import tree as java_tree
from javalang.parser import JavaSyntaxError
from javalang.tokenizer import LexerError

from .errors import ParseError

BYTE_ORDER_MARK = "\ufeff"

# javalang parses and walks recursively; very long expressions exhaust the stack.
TOO_DEEP = "syntax tree too deep"


@dataclass(frozen=True)
class ImportDeclaration:
    path: str
    static: bool = False
    wildcard: bool = False
    line: Optional[int] = None

    @property
    def identifier(self) -> str:
        """Simple name the import binds: the last segment of its path."""

        return self.path.rsplit(".", 1)[-1]

    @property
    def text(self) -> str:
        static = "static " if self.static else ""
        wildcard = ".*" if self.wildcard else ""
        return f"import {static}{self.path}{wildcard};"


@dataclass(frozen=True)
class SyntaxTree:
    imports: Tuple[ImportDeclaration, ...]
    used_names: FrozenSet[str]

    def unused_imports(self) -> Tuple[ImportDeclaration, ...]:
        return tuple(item for item in self.imports if item.identifier not in self.used_names)


def parse_java(text: str, path: Path) -> SyntaxTree:
    """Parse Java source into a ``SyntaxTree`` or raise ``ParseError``."""

    try:
        unit = java_parse.parse(text.lstrip(BYTE_ORDER_MARK))
    except JavaSyntaxError as exc:
        raise ParseError(path, _describe(exc)) from exc
    except LexerError as exc:
        raise ParseError(path, _describe(exc)) from exc
    except RecursionError as exc:
        raise ParseError(path, TOO_DEEP) from exc

    imports = tuple(
        ImportDeclaration(
            path=node.path,
            static=bool(node.static),
            wildcard=bool(node.wildcard),
            line=_line_of(node),
        )
        for node in unit.imports or ()
    )
    try:
        used_names = collect_used_names(unit)
    except RecursionError as exc:
        raise ParseError(path, TOO_DEEP) from exc
    return SyntaxTree(imports=imports, used_names=frozenset(used_names))


def collect_used_names(unit: java_tree.CompilationUnit) -> Set[str]:
    """Walk the tree once and gather every referenced name."""

    used: Set[str] = set()
    for _, node in unit:
        if isinstance(node, java_tree.MemberReference):
            if node.qualifier:
                used.add(_leading_segment(node.qualifier))
            else:
                used.add(node.member)
        elif isinstance(node, java_tree.MethodInvocation):
            # The method name itself is not an identifier expression.
            if node.qualifier:
                used.add(_leading_segment(node.qualifier))
        elif isinstance(node, java_tree.FormalParameter):
            if node.type is not None:
                used.add(node.type.name)
        elif isinstance(node, (java_tree.MethodDeclaration, java_tree.ConstructorDeclaration)):
            used.update(_qualified_names(node.throws or ()))
        elif isinstance(node, java_tree.CatchClauseParameter):
            used.update(_qualified_names(node.types or ()))
    return used


def _qualified_names(names: Iterable[str]) -> Set[str]:
    found: Set[str] = set()
    for name in names:
        found.add(name)
        found.add(_leading_segment(name))
    return found


def _leading_segment(qualified: str) -> str:
    return qualified.split(".", 1)[0]


def _line_of(node: java_tree.Import) -> Optional[int]:
    position = getattr(node, "position", None)
    return getattr(position, "line", None)


def _describe(exc: Exception) -> str:
    description = getattr(exc, "description", None)
    return str(description or exc) or type(exc).__name__
