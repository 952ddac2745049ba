"""
Prefer-Arrow: rule identifiers, option defaults and tree-sitter node vocabulary.
"""

# PREFER-ARROW: ANSI Cyan (\033[36m)
_CYAN: str = "\033[36m"
_RESET: str = "\033[0m"
_PREFER_ARROW_ART: str = r"""
   ___           __                        __
  / _ \_______ _/ _/__ ____  ___ _______  / /    [ v1 ]
 / ___/ __/ -_) _/ -_) __/ / _ `/ __/ __/ /_/    function () {}  =>  () => {}
/_/  /_/  \__/_/ \__/_/    \_,_/_/ /_/   (_)
"""
PREFER_ARROW_BANNER = _CYAN + _PREFER_ARROW_ART + _RESET

RULE_ID: str = "prefer-arrow-functions"
REGISTRY_PREFIX: str = "prefer-arrow."

# Message identifiers (stable across versions).
USE_ARROW_WHEN_FUNCTION: str = "UseArrowWhenFunction"
USE_ARROW_WHEN_SINGLE_RETURN: str = "UseArrowWhenSingleReturn"
USE_EXPLICIT: str = "UseExplicit"
USE_IMPLICIT: str = "UseImplicit"

DEFAULT_MESSAGE_TEMPLATES: dict[str, str] = {
    USE_ARROW_WHEN_FUNCTION: "Prefer using arrow functions over plain functions",
    USE_ARROW_WHEN_SINGLE_RETURN: "Prefer using arrow functions when the function contains only a return",
    USE_EXPLICIT: "Prefer using explicit returns when the arrow function contain only a return",
    USE_IMPLICIT: "Prefer using implicit returns when the arrow function contain only a return",
}

DEFAULT_SINGLE_RETURN_ONLY: bool = False
DEFAULT_DISALLOW_PROTOTYPE: bool = False
DEFAULT_RETURN_STYLE: str = "unchanged"
DEFAULT_CLASS_PROPERTIES_ALLOWED: bool = False

# Fix loop bound per file (same bound ESLint uses for its fix passes).
MAX_FIX_PASSES: int = 10

DEFAULT_EXTENSIONS: tuple[str, ...] = (".js", ".jsx", ".mjs", ".cjs", ".ts", ".tsx", ".mts", ".cts")
TYPESCRIPT_EXTENSIONS: frozenset[str] = frozenset({".ts", ".mts", ".cts"})
DEFAULT_EXCLUDED_DIRS: frozenset[str] = frozenset({"node_modules", ".git", "dist", "build"})
DECLARATION_FILE_SUFFIX: str = ".d.ts"

# tree-sitter node types (tree-sitter-typescript >= 0.23).
FUNCTION_DECLARATION_TYPES: frozenset[str] = frozenset({"function_declaration"})
FUNCTION_EXPRESSION_TYPES: frozenset[str] = frozenset({"function_expression"})
GENERATOR_TYPES: frozenset[str] = frozenset(
    {"generator_function_declaration", "generator_function"}
)
ARROW_FUNCTION_TYPE: str = "arrow_function"
METHOD_DEFINITION_TYPE: str = "method_definition"
PAIR_TYPE: str = "pair"
FIELD_DEFINITION_TYPES: frozenset[str] = frozenset({"public_field_definition", "field_definition"})
CLASS_BODY_TYPE: str = "class_body"
OBJECT_TYPE: str = "object"
EXPORT_STATEMENT_TYPE: str = "export_statement"
STATEMENT_BLOCK_TYPE: str = "statement_block"
RETURN_STATEMENT_TYPE: str = "return_statement"
SEQUENCE_EXPRESSION_TYPE: str = "sequence_expression"
MEMBER_EXPRESSION_TYPE: str = "member_expression"
META_PROPERTY_TYPE: str = "meta_property"
ASSIGNMENT_TYPES: frozenset[str] = frozenset(
    {"assignment_expression", "augmented_assignment_expression"}
)
COMMENT_TYPES: frozenset[str] = frozenset({"comment", "html_comment"})
NAMED_KEY_TYPES: frozenset[str] = frozenset(
    {"property_identifier", "private_property_identifier"}
)
ACCESSOR_TOKENS: frozenset[str] = frozenset({"get", "set"})
DROPPED_MEMBER_TOKENS: frozenset[str] = frozenset({"async", "*"})

THIS_TYPES: frozenset[str] = frozenset({"this", "this_type"})
SUPER_TYPE: str = "super"
ARGUMENTS_IDENTIFIER: str = "arguments"
IDENTIFIER_TYPES: frozenset[str] = frozenset(
    {
        "identifier",
        "property_identifier",
        "shorthand_property_identifier",
        "shorthand_property_identifier_pattern",
    }
)
PROTOTYPE_PROPERTY: str = "prototype"
CONSTRUCTOR_NAME: str = "constructor"
OPTIONAL_MARKER: str = "?"
