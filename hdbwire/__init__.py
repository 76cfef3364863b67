"""Building blocks for the HANA SQL command network protocol.

Field encodings, authentication, server errors and value conversions.
"""

__version__ = "0.111.2"

__all__ = [
    "auth",
    "auth_methods",
    "connectoption",
    "convert",
    "datatype",
    "dfv",
    "encoding",
    "fieldnames",
    "hdberror",
    "identifier",
    "logflag",
    "scram",
]