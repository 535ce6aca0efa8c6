"""
Configuration constants for nsresolve
"""

import os
import tempfile

# Name syntax
SCOPE_SEPARATOR = "::"

# Checker attributes understood by the front end: [[rustycpp::tagDecl(N)]] and
# [[rustycpp::checkSymbolMatchTag(N | true | false, name)]]
CHECKER_ATTRIBUTE_NAMESPACE = "rustycpp"
TAG_DECL_ATTRIBUTE = "tagDecl"
CHECK_SYMBOL_ATTRIBUTE = "checkSymbolMatchTag"

# Fixture files
FIXTURE_FILE_EXTENSION = ".cpp"
DEFAULT_FILE_ENCODING = "utf-8"

# Parser configuration (cache under temp dir to avoid cluttering project root)
DEFAULT_PARSER_CACHE_FILE = os.path.join(tempfile.gettempdir(), "nsresolve_parser.cache")

# Environment variables
ENV_COLOR = "NSRESOLVE_COLOR"
ENV_DUMP_SCOPES = "NSRESOLVE_DUMP_SCOPES"
SCOPE_DUMP_DIR = "scope_dump"
