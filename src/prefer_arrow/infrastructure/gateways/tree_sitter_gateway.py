"""Tree-sitter Gateway - Infrastructure implementation of SyntaxParserProtocol."""

from pathlib import PurePath

import tree_sitter_typescript
from tree_sitter import Language, Parser, Tree

from prefer_arrow.domain.constants import TYPESCRIPT_EXTENSIONS
from prefer_arrow.domain.protocols import SyntaxParserProtocol


class TreeSitterGateway(SyntaxParserProtocol):
    """
    Parses JS/TS sources with tree-sitter-typescript.

    .ts/.mts/.cts use the TypeScript grammar (no JSX, so `<T>x` casts parse); every other
    suffix uses the TSX grammar, which also covers plain JavaScript and JSX.
    """

    def __init__(self) -> None:
        self._languages: dict[str, Language] = {}
        self._parsers: dict[str, Parser] = {}

    def grammar_for(self, file_path: str) -> str:
        """Return 'typescript' or 'tsx' for a path's suffix."""
        suffix = PurePath(file_path).suffix.lower() if file_path else ""
        return "typescript" if suffix in TYPESCRIPT_EXTENSIONS else "tsx"

    def language(self, grammar: str) -> Language:
        if grammar not in self._languages:
            if grammar == "typescript":
                capsule = tree_sitter_typescript.language_typescript()
            else:
                capsule = tree_sitter_typescript.language_tsx()
            self._languages[grammar] = Language(capsule)
        return self._languages[grammar]

    def _parser(self, grammar: str) -> Parser:
        if grammar not in self._parsers:
            self._parsers[grammar] = Parser(self.language(grammar))
        return self._parsers[grammar]

    def parse(self, source: bytes, file_path: str = "") -> Tree:
        """Parse source bytes. tree-sitter is error tolerant: broken input still yields a tree."""
        return self._parser(self.grammar_for(file_path)).parse(source)
