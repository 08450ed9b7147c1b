__version__ = "0.1.0"

from edn_py.edn import (
    Char,
    EdnList,
    EdnMap,
    EdnSet,
    EdnVector,
    Keyword,
    Kind,
    Symbol,
    Tagged,
    TagRegistry,
    dumps,
    loads,
    parse,
    stringify,
)
from edn_py.exceptions import (
    EDNLiteralError,
    EDNParseError,
    EdnPyError,
    EDNSerializeError,
    EDNStructureError,
    EDNTagError,
)

__all__ = [
    # Reader / writer
    "parse",
    "loads",
    "stringify",
    "dumps",
    "TagRegistry",
    # Value model
    "Kind",
    "Symbol",
    "Keyword",
    "Char",
    "EdnList",
    "EdnVector",
    "EdnMap",
    "EdnSet",
    "Tagged",
    # Exceptions
    "EdnPyError",
    "EDNParseError",
    "EDNStructureError",
    "EDNTagError",
    "EDNLiteralError",
    "EDNSerializeError",
    # Version
    "__version__",
]
