"""Tests for the Lua declaration recognizer."""

import pytest

from todoc.extractors.lua import match_blocks, recognize_declarations, tokenize
from todoc.models import ExtractionConfig, FunctionDeclaration, FunctionKind, Position


def declare(code: str, config: ExtractionConfig | None = None) -> tuple[FunctionDeclaration, ...]:
    tokens = tokenize(code)
    return recognize_declarations(tokens, match_blocks(tokens), config)


class TestFunctionForms:
    """Tests for the recognized declaration forms."""

    @pytest.mark.parametrize(
        ("code", "kind", "path", "parameters", "is_local"),
        [
            ("function add(x, y) end", FunctionKind.GLOBAL_NAMED, ("add",), ("x", "y"), False),
            ("local function helper() end", FunctionKind.LOCAL_NAMED, ("helper",), (), True),
            ("function A.b.c(x) end", FunctionKind.TABLE_FIELD, ("A", "b", "c"), ("x",), False),
            (
                "function A:add(x, y) end",
                FunctionKind.TABLE_METHOD,
                ("A", "add"),
                ("self", "x", "y"),
                False,
            ),
            (
                "M.run = function(a) end",
                FunctionKind.ANONYMOUS_ASSIGNED,
                ("M", "run"),
                ("a",),
                False,
            ),
            (
                "local f = function(...) end",
                FunctionKind.ANONYMOUS_ASSIGNED,
                ("f",),
                ("...",),
                True,
            ),
            (
                "x = { cb = function(e) end }",
                FunctionKind.ANONYMOUS_ASSIGNED,
                ("cb",),
                ("e",),
                False,
            ),
            ("pcall(function() end)", FunctionKind.ANONYMOUS, (), (), False),
            ("t[1] = function() end", FunctionKind.ANONYMOUS, (), (), False),
        ],
        ids=[
            "global",
            "local",
            "table_field",
            "method",
            "assigned_field",
            "assigned_local_vararg",
            "table_constructor_field",
            "call_argument",
            "indexed_target",
        ],
    )
    def test_classification(
        self,
        code: str,
        kind: FunctionKind,
        path: tuple[str, ...],
        parameters: tuple[str, ...],
        is_local: bool,
    ) -> None:
        """Verify each syntactic form yields the expected declaration."""
        (declaration,) = declare(code)
        assert declaration.kind is kind
        assert declaration.path == path
        assert declaration.parameters == parameters
        assert declaration.is_local is is_local

    def test_method_implicit_self_dot_does_not(self) -> None:
        """Verify colon methods get self and dot functions do not."""
        method, field = declare("function A:add(x) end\nfunction A.add(x) end")
        assert method.parameters == ("self", "x")
        assert method.explicit_parameters == ("x",)
        assert field.parameters == ("x",)

    @pytest.mark.parametrize(
        ("code", "signature", "qualified_name"),
        [
            ("local function f(x) end", "local function f(x)", "f"),
            ("function A:add(x, y) end", "function A:add(x, y)", "A:add"),
            ("function a.b.c() end", "function a.b.c()", "a.b.c"),
            ("local t = function(a) end", "local t = function(a)", "t"),
            ("pcall(function(err) end)", "function(err)", ""),
        ],
        ids=["local", "method", "field", "assigned", "anonymous"],
    )
    def test_signature(self, code: str, signature: str, qualified_name: str) -> None:
        """Verify rendered signatures and qualified names."""
        (declaration,) = declare(code)
        assert declaration.signature == signature
        assert declaration.qualified_name == qualified_name


class TestHeaderParsing:
    """Tests for parameter lists and header layout."""

    def test_multiline_parameters_equal_single_line(self) -> None:
        """Verify line breaks and comments inside the parameter list are ignored."""
        (multi,) = declare("function A.sub( x,\n \t\t\ty, -- second\n\t\t    z)\n\nend")
        (single,) = declare("function A.sub(x, y, z) end")
        assert multi.parameters == single.parameters == ("x", "y", "z")

    def test_header_across_lines(self) -> None:
        """Verify a header split across lines is still recognized."""
        (declaration,) = declare("local\nfunction\n  helper\n  (a)\nend")
        assert declaration.kind is FunctionKind.LOCAL_NAMED
        assert declaration.path == ("helper",)

    def test_positions(self) -> None:
        """Verify start is the statement's first token and end the terminator."""
        (declaration,) = declare("\n  local function f()\n  end")
        assert declaration.start == Position(line=2, column=3, offset=3)
        assert declaration.end.line == 3
        assert declaration.body.keyword == "function"


class TestNesting:
    """Tests for arena indices and parent links."""

    def test_nested_declarations(self) -> None:
        """Verify nested functions are found in source order with parent links."""
        code = (
            "function outer()\n"
            "  local function inner()\n"
            "    return function() end\n"
            "  end\n"
            "  if x then\n"
            "    local function deep() end\n"
            "  end\n"
            "end\n"
            "function after() end"
        )
        declarations = declare(code)
        assert [d.index for d in declarations] == [0, 1, 2, 3, 4]
        assert [d.name for d in declarations] == ["outer", "inner", "", "deep", "after"]
        assert [d.parent for d in declarations] == [None, 0, 1, 0, None]

    def test_deep_nesting(self) -> None:
        """Verify nesting far beyond the interpreter recursion limit is walked."""
        depth = 3000
        code = "".join(f"function f{i}() do " for i in range(depth)) + "end end " * depth
        declarations = declare(code)
        assert len(declarations) == depth
        assert declarations[0].parent is None
        assert declarations[-1].name == f"f{depth - 1}"
        assert declarations[-1].parent == depth - 2

    def test_exclude_anonymous(self) -> None:
        """Verify unbound anonymous functions are skipped when configured."""
        config = ExtractionConfig(include_anonymous=False)
        code = "function f()\n  pcall(function() end)\nend\nlocal g = function() end"
        declarations = declare(code, config)
        assert [d.kind for d in declarations] == [
            FunctionKind.GLOBAL_NAMED,
            FunctionKind.ANONYMOUS_ASSIGNED,
        ]
        assert [d.index for d in declarations] == [0, 1]

    def test_non_function_blocks_ignored(self) -> None:
        """Verify do/if/repeat blocks produce no declarations."""
        assert declare("do end\nif x then end\nrepeat until y") == ()
