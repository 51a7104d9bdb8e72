"""Regex symbol extraction tests."""

import os

import pytest

from code_search_mcp.core.languages import detect_language
from code_search_mcp.core.models import SymbolType
from code_search_mcp.core.symbols import get_context, parse_file_symbols, split_lines

BASE = os.path.abspath("project")


def parse(rel_path, content):
    return parse_file_symbols(os.path.join(BASE, rel_path), content, BASE)


def kinds(symbols):
    return [(symbol.name, symbol.type) for symbol in symbols]


@pytest.mark.unit
class TestLanguageDetection:

    @pytest.mark.parametrize("file_name,language", [
        ("a.ts", "typescript"),
        ("a.TSX", "typescript"),
        ("a.mjs", "javascript"),
        ("a.pyi", "python"),
        ("main.go", "go"),
        ("lib.rs", "rust"),
        ("App.java", "java"),
        ("Program.cs", "csharp"),
    ])
    def test_known_extensions(self, file_name, language):
        assert detect_language(file_name) == language

    def test_unknown_extension(self):
        assert detect_language("README.md") is None
        assert detect_language("Makefile") is None


@pytest.mark.unit
class TestTypeScriptSymbols:

    def test_function_position_and_signature(self):
        symbols = parse("src/a.ts", "function getFileContent() {}\n")

        assert len(symbols) == 1
        symbol = symbols[0]
        assert symbol.name == "getFileContent"
        assert symbol.type == SymbolType.FUNCTION
        assert symbol.language == "typescript"
        assert symbol.file_path == "src/a.ts", "Paths should be root-relative with forward slashes"
        assert (symbol.line, symbol.column) == (1, 10)
        assert symbol.signature == "function getFileContent() {}"

    def test_one_line_can_produce_several_symbols(self):
        symbols = parse("a.ts", "export class ConfigLoader {\n}\n")

        assert kinds(symbols) == [
            ("ConfigLoader", SymbolType.CLASS),
            ("ConfigLoader", SymbolType.EXPORT),
        ]

    def test_interface_type_and_enum(self):
        content = (
            "export interface Config {\n"
            "  root: string;\n"
            "}\n"
            "type Mode = 'fast' | 'precise';\n"
            "enum Color { Red, Green }\n"
        )
        symbols = parse("types.ts", content)
        found = kinds(symbols)

        assert ("Config", SymbolType.INTERFACE) in found
        assert ("Mode", SymbolType.TYPE) in found
        assert ("Color", SymbolType.ENUM) in found

    def test_arrow_function_is_function_and_variable(self):
        symbols = parse("a.ts", "const loadConfig = (path) => {\n  return path;\n};\n")

        assert kinds(symbols) == [
            ("loadConfig", SymbolType.FUNCTION),
            ("loadConfig", SymbolType.VARIABLE),
        ]

    def test_import_captures_module_path(self):
        symbols = parse("a.ts", "import { Settings } from './settings';\n")

        assert kinds(symbols) == [("./settings", SymbolType.IMPORT)]

    def test_context_spans_surrounding_lines(self):
        content = "// one\n// two\nfunction middle() {\n// four\n// five\n// six\n"
        symbol = parse("a.ts", content)[0]

        assert symbol.line == 3
        assert symbol.context == "// one\n// two\nfunction middle() {\n// four\n// five"


@pytest.mark.unit
class TestOtherLanguages:

    def test_python(self):
        content = "import os\n\ndef format_path(path):\n    return path\n\nclass PathFormatter:\n    pass\n"
        found = kinds(parse("utils.py", content))

        assert ("format_path", SymbolType.FUNCTION) in found
        assert ("PathFormatter", SymbolType.CLASS) in found
        assert ("os", SymbolType.IMPORT) in found

    def test_go(self):
        content = "type Server struct {\n}\n\nfunc (s *Server) Start() error {\n"
        found = kinds(parse("main.go", content))

        assert ("Server", SymbolType.CLASS) in found
        assert ("Start", SymbolType.FUNCTION) in found

    def test_rust(self):
        content = "pub struct Index {\n}\n\npub fn build_index(root: &str) -> Index {\n"
        found = kinds(parse("lib.rs", content))

        assert ("Index", SymbolType.CLASS) in found
        assert ("build_index", SymbolType.FUNCTION) in found
        assert ("build_index", SymbolType.EXPORT) in found

    def test_unsupported_language_has_no_symbols(self):
        assert parse("notes.md", "function looksLikeCode() {}\n") == []


@pytest.mark.unit
class TestLineHelpers:

    def test_split_lines_strips_carriage_returns(self):
        assert split_lines("a\r\nb\nc") == ["a", "b", "c"]

    def test_get_context_clamps_at_file_edges(self):
        lines = ["first", "second", "third"]

        assert get_context(lines, 0, 1) == "first\nsecond"
        assert get_context(lines, 2, 5) == "first\nsecond\nthird"
